from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Literal
from datetime import datetime

from dancey_portal.schemas.common_schema import Pagination


class MembershipBase(BaseModel):
    membership_name: str = Field(..., min_length=1, max_length=100, example="Unlimited Monthly")
    price_per_month: str = Field(..., example="$30/month")
    status: Literal["Active", "Inactive"] = Field("Active", example="Active")

    @field_validator("price_per_month", mode="before")
    @classmethod
    def price_as_text(cls, value):
        return str(value) if isinstance(value, (int, float)) else value


class MembershipCreate(MembershipBase):
    pass


class MembershipUpdate(BaseModel):
    membership_name: Optional[str] = Field(None, min_length=1, max_length=100)
    price_per_month: Optional[str] = Field(None, example="$45/month")
    status: Optional[Literal["Active", "Inactive"]] = None

    @field_validator("price_per_month", mode="before")
    @classmethod
    def price_as_text(cls, value):
        return str(value) if isinstance(value, (int, float)) else value


class MembershipToggle(BaseModel):
    enabled: bool


class Membership(BaseModel):
    id: str
    membership_name: str
    price_per_month: str = Field(..., example="$30.00/month")
    price_value: float
    status: str
    enabled: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MembershipListResponse(BaseModel):
    memberships: List[Membership]
    pagination: Pagination
