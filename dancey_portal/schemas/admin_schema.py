from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime

from dancey_portal.schemas.common_schema import Pagination

AdminRoleName = Literal["admin", "super_admin"]
AdminStatusName = Literal["active", "inactive"]


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


class AdminBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, example="Jane Doe")
    email: EmailStr = Field(..., example="jane@dancey.com")
    phone_number: Optional[str] = Field(None, min_length=10, max_length=15, example="0123456789")
    role: AdminRoleName = Field("admin", example="admin")
    status: AdminStatusName = Field("active", example="active")
    img_url: Optional[str] = Field(None, max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return _normalize_email(value)


class AdminCreate(AdminBase):
    password: Optional[str] = Field(None, min_length=6, description="Generated when omitted")


class AdminUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, min_length=10, max_length=15)
    role: Optional[AdminRoleName] = None
    status: Optional[AdminStatusName] = None
    img_url: Optional[str] = Field(None, max_length=500)
    password: Optional[str] = Field(None, min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return _normalize_email(value)


class AdminStatusUpdate(BaseModel):
    status: AdminStatusName


class Admin(BaseModel):
    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    role: str
    status: str
    img_url: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("role", "status", mode="before")
    @classmethod
    def enum_value(cls, value):
        return getattr(value, "value", value)

    class Config:
        from_attributes = True


class AdminCreateResponse(Admin):
    generated_password: Optional[str] = None


class AdminListResponse(BaseModel):
    admins: List[Admin]
    pagination: Pagination
    active_count: int
    inactive_count: int


class Profile(BaseModel):
    id: str
    name: str
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    role: str
    img_url: Optional[str] = None
    last_login: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, min_length=10, max_length=15)
    img_url: Optional[str] = Field(None, max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return _normalize_email(value)
