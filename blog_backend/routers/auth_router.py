from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from blog_backend.db import get_db
from blog_backend.schemas.auth_schemas import RegisterModel, LoginModel
from blog_backend.services.auth_service import register_user, login_user

auth_router = APIRouter(prefix="/auth", tags=["auth"])

@auth_router.post("/register", status_code=201)
def register(body: RegisterModel, db: Session = Depends(get_db)):
    return register_user(body, db)

@auth_router.post("/login")
def login(body: LoginModel, db: Session = Depends(get_db)):
    return login_user(body, db)
