from sqlalchemy.orm import Session
from sqlalchemy import select
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from dancey_portal.models.checkin_model import ClassCheckin
from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.enrollment_model import Enrollment
from dancey_portal.schemas.checkin_schema import Checkin, CheckinClass, ScheduleTime


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def checkin_moment(checkin: ClassCheckin) -> datetime:
    """Date and time of a check-in, falling back to created_at for missing parts."""
    created = _naive_utc(checkin.created_at)
    return datetime.combine(checkin.checkin_date or created.date(), checkin.checkin_time or created.time())


def _matches_type(checkin: ClassCheckin, checkin_type: str, now: datetime) -> bool:
    if checkin_type == "upcoming":
        return checkin_moment(checkin) >= now
    if checkin_type == "ended":
        return checkin_moment(checkin) < now
    return True


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_checkin(db: Session, checkin_id: str) -> Optional[ClassCheckin]:
    return db.get(ClassCheckin, checkin_id)


def get_classes_with_checkins(
    db: Session,
    page: int = 1,
    limit: int = 10,
    checkin_type: str = "upcoming",
    status: str = "all",
    search: Optional[str] = None,
) -> Tuple[List[CheckinClass], int]:
    query = select(ClassCheckin, DanceClass).join(DanceClass, DanceClass.id == ClassCheckin.class_id)
    if status != "all":
        query = query.where(ClassCheckin.checkin_status == status)

    term = search.strip().lower() if search and search.strip() else None
    now = _now()
    grouped = {}
    for checkin, db_class in db.execute(query).all():
        if term and term not in db_class.class_name.lower():
            continue
        if not _matches_type(checkin, checkin_type, now):
            continue
        entry = grouped.setdefault(db_class.id, CheckinClass(
            class_id=db_class.id,
            class_name=db_class.class_name,
            class_image=db_class.image or None,
            checkin_count=0,
        ))
        entry.checkin_count += 1

    classes = sorted(grouped.values(), key=lambda c: c.class_name.lower())
    start = (page - 1) * limit
    return classes[start:start + limit], len(classes)


def _schedule_time(schedule, schedule_id: Optional[str]) -> Optional[ScheduleTime]:
    if not schedule_id or not schedule:
        return None
    entry = next((s for s in schedule if s.get("schedule_id") == schedule_id), None)
    if entry and entry.get("start_time") and entry.get("end_time"):
        return ScheduleTime(start_time=entry["start_time"], end_time=entry["end_time"])
    return None


def get_class_checkins(db: Session, db_class: DanceClass, checkin_type: str = "upcoming") -> List[Checkin]:
    query = (
        select(ClassCheckin, Enrollment)
        .outerjoin(Enrollment, Enrollment.id == ClassCheckin.enrollment_id)
        .where(ClassCheckin.class_id == db_class.id)
    )
    now = _now()
    rows = [
        (checkin, enrollment)
        for checkin, enrollment in db.execute(query).all()
        if _matches_type(checkin, checkin_type, now)
    ]
    rows.sort(key=lambda row: checkin_moment(row[0]), reverse=True)

    result = []
    for checkin, enrollment in rows:
        moment = checkin_moment(checkin)
        result.append(Checkin(
            id=checkin.id,
            enrollment_id=checkin.enrollment_id,
            class_id=checkin.class_id,
            user_id=checkin.user_id,
            checkin_date=moment.date(),
            checkin_time=moment.time(),
            checkin_status=checkin.checkin_status,
            schedule_id=checkin.schedule_id,
            schedule_time=_schedule_time(db_class.schedule, checkin.schedule_id),
            created_at=checkin.created_at,
            user_name=enrollment.user_name if enrollment else None,
            user_email=enrollment.user_email if enrollment else None,
            user_phone=enrollment.user_phone if enrollment else None,
            enrollment_status=enrollment.status.value if enrollment else None,
        ))
    return result


def set_checkin_status(db: Session, checkin: ClassCheckin, status: bool) -> ClassCheckin:
    checkin.checkin_status = "true" if status else "false"
    db.commit()
    db.refresh(checkin)
    return checkin


def delete_checkin(db: Session, checkin: ClassCheckin) -> None:
    db.delete(checkin)
    db.commit()
