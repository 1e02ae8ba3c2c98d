from pydantic import BaseModel
from typing import List, Optional
from datetime import date as dt_date, time as dt_time, datetime

from dancey_portal.schemas.common_schema import Pagination


class ScheduleTime(BaseModel):
    start_time: str
    end_time: str


class CheckinClass(BaseModel):
    class_id: str
    class_name: str
    class_image: Optional[str] = None
    checkin_count: int


class CheckinClassListResponse(BaseModel):
    classes: List[CheckinClass]
    pagination: Pagination


class Checkin(BaseModel):
    id: str
    enrollment_id: str
    class_id: str
    user_id: str
    checkin_date: dt_date
    checkin_time: dt_time
    checkin_status: str
    schedule_id: Optional[str] = None
    schedule_time: Optional[ScheduleTime] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_phone: Optional[str] = None
    enrollment_status: Optional[str] = None


class ClassCheckinsResponse(BaseModel):
    class_name: Optional[str] = None
    check_ins: List[Checkin]


class CheckinStatusUpdate(BaseModel):
    checkin_status: bool


class CheckinStatusResponse(BaseModel):
    id: str
    checkin_status: str
