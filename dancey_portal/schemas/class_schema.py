from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime
from decimal import Decimal

from dancey_portal.schemas.common_schema import Pagination
from dancey_portal.schemas.schedule_schema import ScheduleEntryBase, ScheduleEntry

CLASS_NAME_PATTERN = r"^[a-zA-Z0-9 ]+$"
INSTRUCTOR_NAME_PATTERN = r"^[a-zA-Z\s]+$"


def _strip(value):
    return value.strip() if isinstance(value, str) else value


# ----- WIZARD STEP INPUTS -----

class StepDetailsInput(BaseModel):
    step: Literal["details"]
    class_name: str = Field(..., min_length=1, max_length=100, pattern=CLASS_NAME_PATTERN, example="Yoga Basics")
    description: str = Field(..., min_length=20, max_length=2000, example="A gentle introduction to yoga for every level.")
    instructor_name: str = Field(..., min_length=1, max_length=100, pattern=INSTRUCTOR_NAME_PATTERN, example="Jane Doe")

    @field_validator("class_name", "description", "instructor_name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class StepMediaInput(BaseModel):
    step: Literal["media"]
    image_url: Optional[str] = Field(None, max_length=500, example="https://bucket.s3.us-east-1.amazonaws.com/img.png")
    overview_video_url: Optional[str] = Field(None, max_length=500, example="https://bucket.s3.us-east-1.amazonaws.com/vid.mp4")

    @model_validator(mode="after")
    def require_some_media(self):
        if not self.image_url and not self.overview_video_url:
            raise ValueError("image_url or overview_video_url is required")
        return self


class StepScheduleInput(ScheduleEntryBase):
    step: Literal["schedule"]


class StepPricingInput(BaseModel):
    step: Literal["pricing"]
    class_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, example=50)
    promotion_id: Optional[str] = Field(None, example=None)
    membership_ids: List[str] = Field(..., min_length=1)
    class_pack_ids: List[str] = Field(default_factory=list)

    @field_validator("promotion_id", mode="before")
    @classmethod
    def empty_promotion_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


ClassStepInput = Annotated[
    Union[StepDetailsInput, StepMediaInput, StepScheduleInput, StepPricingInput],
    Field(discriminator="step"),
]


class DraftUpsertRequest(BaseModel):
    class_id: Optional[str] = Field(None, description="Id returned by a previous step; omit on the first step")
    fields: ClassStepInput


class ToggleStatusRequest(BaseModel):
    is_active: bool


# ----- RESPONSES -----

class ClassDetail(BaseModel):
    id: str
    class_name: str
    class_description: str
    course_instructor: str
    image: str
    overview_video: str
    schedule: List[ScheduleEntry] = []
    class_price: float
    promotion_id: Optional[str] = None
    is_active: bool
    is_completed: bool
    rating: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DraftResponse(BaseModel):
    id: str
    resume_step: int
    dance_class: ClassDetail
    replaced_media_urls: List[str] = []


class ResumeStepResponse(BaseModel):
    id: str
    step_index: int


class ActivateResponse(BaseModel):
    id: str
    is_active: bool
    is_completed: bool


class DeleteClassResponse(BaseModel):
    success: bool = True
    message: str
    media_urls: List[str] = []
    pending_media_urls: List[str] = []


class ClassListItem(ClassDetail):
    display_id: str


class ClassListResponse(BaseModel):
    classes: List[ClassListItem]
    pagination: Pagination
    total_active_classes: int
    total_completed_classes: int


class IncompleteClass(ClassDetail):
    last_step: int


class IncompleteClassListResponse(BaseModel):
    classes: List[IncompleteClass]


class AvailableClass(BaseModel):
    id: str
    class_name: str
    course_instructor: str
    class_price: float

    class Config:
        from_attributes = True


class EnrolledUser(BaseModel):
    enrollment_id: str
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    status: str
    enrolled_at: Optional[datetime] = None


class ClassWithEnrollments(BaseModel):
    id: str
    class_name: str
    course_instructor: str
    enrolled_users: List[EnrolledUser]


class LinkedIdsResponse(BaseModel):
    class_id: str
    ids: List[str]
