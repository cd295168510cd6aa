import secrets
import bcrypt
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from blog_backend.config import BCRYPT_ROUNDS, TOKEN_BYTES
from blog_backend.db import get_db
from blog_backend.models import User
from blog_backend.utils.errors import Unauthenticated
from blog_backend.utils.logging_utils import get_logger

logger = get_logger("auth")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def parse_bearer_token(auth_header: str) -> str:
    """Return the token from an `Authorization: Bearer <token>` header.

    Raises Unauthenticated when the header is missing, uses another scheme
    or does not have exactly two segments.
    """
    if not auth_header:
        raise Unauthenticated("Authorization header missing")

    parts = auth_header.strip().split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthenticated("Invalid authorization header")

    return parts[1]


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = parse_bearer_token(request.headers.get("authorization"))

    user = db.query(User).filter(User.token == token).first()
    if user is None:
        logger.info(f"Rejected token | path={request.url.path}")
        raise Unauthenticated("Invalid or expired token")

    request.state.user = user
    return user
