import logging
import os
import sys
from blog_backend.config import LOG_DIR, LOG_LEVEL

LOG_FILE = "blog_api.log"
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def get_logger(name: str) -> logging.Logger:
    """Named logger writing to LOG_DIR/blog_api.log and to stdout.
    Handlers are attached once per name."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL)

    os.makedirs(LOG_DIR, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(LOG_DIR, LOG_FILE))
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Logging in the terminal
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    return logger
