from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

from dancey_portal.schemas.common_schema import Pagination


class RatingView(BaseModel):
    id: str
    enrollment_id: str
    class_id: str
    class_name: Optional[str] = None
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RatingListResponse(BaseModel):
    ratings: List[RatingView]
    pagination: Pagination


class RatingStatusUpdate(BaseModel):
    status: Literal["approved", "rejected"]


class ClassRatingsResponse(BaseModel):
    class_id: str
    ratings: List[RatingView]
    average_rating: float
    total_ratings: int
