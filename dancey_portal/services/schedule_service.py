# dancey_portal/services/schedule_service.py
"""
Schedule entries of a class.

Entries live in the `classes.schedule` JSON column as a list of dicts. Every
change assigns a new list so SQLAlchemy sees the column as modified.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from dancey_portal.database import atomic
from dancey_portal.exceptions import NotFoundError, ValidationError
from dancey_portal.models.class_model import DanceClass
from dancey_portal.schemas.schedule_schema import ScheduleEntryBase, ScheduleEntryUpdate

logger = logging.getLogger(__name__)


# ----- HELPERS -----

def _serialize(entry: ScheduleEntryBase) -> dict:
    return {
        "schedule_id": str(uuid.uuid4()),
        "name": entry.name,
        "date": entry.date.isoformat(),
        "start_time": entry.start_time.strftime("%H:%M"),
        "end_time": entry.end_time.strftime("%H:%M"),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def _get_class(db: Session, class_id: str) -> DanceClass:
    db_class = db.get(DanceClass, class_id)
    if db_class is None:
        raise NotFoundError("Class not found")
    return db_class


def append_entry(db_class: DanceClass, entry: ScheduleEntryBase) -> dict:
    """Append one entry to a loaded class. The caller commits."""
    new_entry = _serialize(entry)
    db_class.schedule = list(db_class.schedule or []) + [new_entry]
    return new_entry


# ----- OPERATIONS -----

def list_entries(db: Session, class_id: str, on_date: Optional[date] = None) -> List[dict]:
    db_class = _get_class(db, class_id)
    entries = list(db_class.schedule or [])
    if on_date is not None:
        entries = [e for e in entries if e.get("date") == on_date.isoformat()]
    return entries


def add_entry(db: Session, class_id: str, entry: ScheduleEntryBase) -> dict:
    with atomic(db):
        db_class = _get_class(db, class_id)
        new_entry = append_entry(db_class, entry)
    logger.info("Added schedule entry %s to class %s", new_entry["schedule_id"], class_id)
    return new_entry


def update_entry(db: Session, class_id: str, schedule_id: str, changes: ScheduleEntryUpdate) -> dict:
    with atomic(db):
        db_class = _get_class(db, class_id)
        entries = [dict(e) for e in (db_class.schedule or [])]
        target = next((e for e in entries if e.get("schedule_id") == schedule_id), None)
        if target is None:
            raise NotFoundError("Schedule entry not found")

        update_data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            target["name"] = update_data["name"]
        if "date" in update_data:
            target["date"] = update_data["date"].isoformat()
        if "start_time" in update_data:
            target["start_time"] = update_data["start_time"].strftime("%H:%M")
        if "end_time" in update_data:
            target["end_time"] = update_data["end_time"].strftime("%H:%M")

        # zero-padded HH:MM strings compare in time order
        if target["end_time"] <= target["start_time"]:
            raise ValidationError("end_time must be later than start_time", field="end_time")

        db_class.schedule = entries
    return target


def remove_entry(db: Session, class_id: str, schedule_id: str) -> None:
    with atomic(db):
        db_class = _get_class(db, class_id)
        entries = list(db_class.schedule or [])
        remaining = [e for e in entries if e.get("schedule_id") != schedule_id]
        if len(remaining) == len(entries):
            raise NotFoundError("Schedule entry not found")
        db_class.schedule = remaining
    logger.info("Removed schedule entry %s from class %s", schedule_id, class_id)
