from pydantic import BaseModel, Field


class Pagination(BaseModel):
    current_page: int = Field(..., example=1)
    total_pages: int = Field(..., example=3)
    total_items: int = Field(..., example=25)
    items_per_page: int = Field(..., example=10)
    has_next_page: bool = Field(..., example=True)
    has_prev_page: bool = Field(..., example=False)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
