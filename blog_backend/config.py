import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./blog.db")

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"

# Logging
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Auth
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
TOKEN_BYTES = 24

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if origin.strip()]
