from pydantic import BaseModel
from typing import Optional

# Fields are optional so missing values get the API's own messages

class RegisterModel(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginModel(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
