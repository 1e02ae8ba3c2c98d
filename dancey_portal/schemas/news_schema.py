from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import date as dt_date, datetime

from dancey_portal.schemas.common_schema import Pagination


class NewsBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, example="New salsa classes this winter")
    content: str = Field(..., min_length=1, example="We are adding three new salsa classes...")
    image_url: Optional[str] = Field(None, max_length=500)
    publish_date: Optional[dt_date] = Field(None, example="2026-11-01")
    status: Literal["published", "draft"] = "draft"
    category: Optional[str] = Field(None, max_length=50, example="Announcements")
    is_pinned: bool = False


class NewsCreate(NewsBase):
    pass


class NewsUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, max_length=500)
    publish_date: Optional[dt_date] = None
    status: Optional[Literal["published", "draft"]] = None
    category: Optional[str] = Field(None, max_length=50)
    is_pinned: Optional[bool] = None


class NewsPin(BaseModel):
    is_pinned: bool


class News(BaseModel):
    id: str
    title: str
    content: str
    image_url: Optional[str] = None
    publish_date: Optional[dt_date] = None
    status: str
    category: Optional[str] = None
    is_pinned: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NewsListResponse(BaseModel):
    news: List[News]
    pagination: Pagination
    published_count: int
    draft_count: int


