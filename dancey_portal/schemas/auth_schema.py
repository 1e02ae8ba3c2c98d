from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


# JWT payload
class TokenData(BaseModel):
    admin_id: Optional[str] = None


class AuthenticatedAdmin(BaseModel):
    id: str = Field(..., description="Admin id")
    name: str = Field(..., example="Jane Doe")
    email: EmailStr = Field(..., example="jane@dancey.com")
    role: str = Field(..., example="admin")
    status: str = Field("active", example="active")
    img_url: Optional[str] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., example="jane@dancey.com")
    password: str = Field(..., min_length=1, example="secure_password")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    message: Optional[str] = "Login successful"
    admin: AuthenticatedAdmin
