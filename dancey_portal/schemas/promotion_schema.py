from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal

from dancey_portal.schemas.common_schema import Pagination

DISCOUNT_PATTERN = r"^\d+(\.\d{1,2})?%?$"


def discount_value(value) -> Decimal:
    return Decimal(str(value).strip().rstrip("%"))


class PromotionBase(BaseModel):
    promotion_name: str = Field(..., min_length=1, max_length=100, example="Summer Sale")
    discount: str = Field(..., pattern=DISCOUNT_PATTERN, example="15%")
    start_date: dt_date = Field(..., example="2026-11-01")
    end_date: dt_date = Field(..., example="2026-11-30")
    status: Literal["Active", "Inactive"] = "Active"
    is_enabled: bool = True

    @field_validator("discount", mode="before")
    @classmethod
    def discount_as_text(cls, value):
        return str(value).strip() if value is not None else value

    @field_validator("discount")
    @classmethod
    def discount_within_range(cls, value):
        if discount_value(value) > 100:
            raise ValueError("discount cannot exceed 100%")
        return value

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def discount_decimal(self) -> Decimal:
        return discount_value(self.discount)


class PromotionCreate(PromotionBase):
    @model_validator(mode="after")
    def dates_not_in_past(self):
        today = dt_date.today()
        if self.start_date < today or self.end_date < today:
            raise ValueError("Promotion dates cannot be in the past")
        return self


class PromotionUpdate(BaseModel):
    promotion_name: Optional[str] = Field(None, min_length=1, max_length=100)
    discount: Optional[str] = Field(None, pattern=DISCOUNT_PATTERN)
    start_date: Optional[dt_date] = None
    end_date: Optional[dt_date] = None
    status: Optional[Literal["Active", "Inactive"]] = None
    is_enabled: Optional[bool] = None

    @field_validator("discount", mode="before")
    @classmethod
    def discount_as_text(cls, value):
        return str(value).strip() if value is not None else value


class Promotion(BaseModel):
    id: str
    promotion_name: str
    discount: float
    start_date: dt_date
    end_date: dt_date
    status: str
    is_enabled: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PromotionListResponse(BaseModel):
    promotions: List[Promotion]
    pagination: Pagination
