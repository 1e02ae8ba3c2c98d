from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from dancey_portal.schemas.common_schema import Pagination


class ClassPackBase(BaseModel):
    pack_name: str = Field(..., min_length=1, max_length=100, example="Beginner Bundle")
    is_active: bool = Field(True, example=True)

    @field_validator("pack_name", mode="before")
    @classmethod
    def strip_pack_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class ClassPackCreate(ClassPackBase):
    class_ids: List[str] = Field(..., min_length=1, description="At least one class must be selected")
    is_discount_enabled: bool = Field(False, example=True)
    discount_percent: Optional[float] = Field(None, ge=0, le=100, example=25)


class ClassPackUpdate(ClassPackCreate):
    pass


class PackClass(BaseModel):
    id: str
    class_name: str
    course_instructor: str
    class_price: float
    is_active: bool
    schedule: list = []

    class Config:
        from_attributes = True


class ClassPackView(BaseModel):
    id: str
    pack_name: str
    is_active: bool
    price: float
    created_at: Optional[datetime] = None
    class_count: int = 0
    classes: List[PackClass] = []


class ClassPackUpdateResponse(ClassPackView):
    price_recomputed: bool


class ClassPackListResponse(BaseModel):
    class_packs: List[ClassPackView]
    pagination: Pagination
