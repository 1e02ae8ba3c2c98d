from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime

from dancey_portal.schemas.common_schema import Pagination


class InstructorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, example="Jane Doe")
    email: EmailStr = Field(..., example="jane.doe@dancey.com")
    phone_number: Optional[str] = Field(None, max_length=20, example="+15551234567")
    profile_photo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class InstructorCreate(InstructorBase):
    password: Optional[str] = Field(None, min_length=6)
    auto_generate_password: bool = False
    class_ids: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def password_or_generated(self):
        if not self.auto_generate_password and not self.password:
            raise ValueError("password is required unless auto_generate_password is set")
        return self


class InstructorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=20)
    profile_photo_url: Optional[str] = Field(None, max_length=500)
    class_ids: Optional[List[str]] = Field(None, description="Omit to keep the current classes")


class InstructorStatusUpdate(BaseModel):
    status: bool


class InstructorClass(BaseModel):
    class_id: str
    class_name: str


class Instructor(BaseModel):
    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    profile_photo_url: Optional[str] = None
    status: bool
    created_at: Optional[datetime] = None
    classes: List[InstructorClass] = []
    class_ids: List[str] = []


class InstructorCreateResponse(Instructor):
    generated_password: Optional[str] = None


class InstructorListResponse(BaseModel):
    instructors: List[Instructor]
    pagination: Pagination
