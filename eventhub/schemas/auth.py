from pydantic import BaseModel, EmailStr, Field
from .common import CamelModel


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    email: str
    role: str
    name: str
    user_id: int
