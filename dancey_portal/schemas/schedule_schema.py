from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date as dt_date, time as dt_time


class ScheduleEntryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, example="Morning Flow")
    date: dt_date = Field(..., example="2026-11-02")
    start_time: dt_time = Field(..., example="09:00")
    end_time: dt_time = Field(..., example="10:00")

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be later than start_time")
        return self


class ScheduleEntryCreate(ScheduleEntryBase):
    pass


class ScheduleEntryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[dt_date] = None
    start_time: Optional[dt_time] = None
    end_time: Optional[dt_time] = None


class ScheduleEntry(BaseModel):
    schedule_id: str
    name: str
    date: dt_date
    start_time: dt_time
    end_time: dt_time
    created_at: Optional[str] = None
