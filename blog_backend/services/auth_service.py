from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from blog_backend.models import User
from blog_backend.schemas.auth_schemas import RegisterModel, LoginModel
from blog_backend.utils.auth_utils import hash_password, verify_password, generate_token
from blog_backend.utils.errors import ValidationError, NotFound
from blog_backend.utils.logging_utils import get_logger
from blog_backend.utils.validators import is_blank, is_valid_email, is_strong_password, PASSWORD_RULES

logger = get_logger("auth")


def log_auth_event(event_name, details=""):
    logger.info(f"AUTH: {event_name} | {details}")


def register_user(req: RegisterModel, db: Session):
    if is_blank(req.username) or is_blank(req.email) or is_blank(req.password):
        raise ValidationError("All fields are required")

    if not is_valid_email(req.email):
        raise ValidationError("Invalid email format")

    if not is_strong_password(req.password):
        raise ValidationError(PASSWORD_RULES)

    if db.query(User).filter_by(email=req.email).first():
        raise ValidationError("Email already exists")

    if db.query(User).filter_by(username=req.username).first():
        raise ValidationError("Username already exists")

    new_user = User(
        username=req.username,
        email=req.email,
        password_hash=hash_password(req.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Same email or username registered between the checks above and this insert
        db.rollback()
        if db.query(User).filter_by(email=req.email).first():
            raise ValidationError("Email already exists")
        raise ValidationError("Username already exists")

    log_auth_event("register", f"username={req.username}")
    return {"message": "User registered successfully"}


def login_user(req: LoginModel, db: Session):
    if is_blank(req.email) or is_blank(req.password):
        raise ValidationError("Email and password are required")

    if not is_valid_email(req.email):
        raise ValidationError("Invalid email format")

    # Unknown email and wrong password answer the same way
    user = db.query(User).filter_by(email=req.email).first()
    if not user or not verify_password(req.password, user.password_hash):
        log_auth_event("login failed", f"email={req.email}")
        raise NotFound("Invalid credentials")

    # New token for this login; the previous one stops working
    user.token = generate_token()
    db.commit()
    db.refresh(user)

    log_auth_event("login", f"user_id={user.id}")
    return {
        "message": "Login successful",
        "token": user.token,
        "user": {"id": user.id, "username": user.username, "email": user.email},
    }
