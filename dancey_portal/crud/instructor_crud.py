from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from typing import List, Optional, Tuple

from dancey_portal.models.instructor_model import Instructor
from dancey_portal.models.association_tables import InstructorClass
from dancey_portal.schemas import instructor_schema
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset


def get_instructor(db: Session, instructor_id: str) -> Optional[Instructor]:
    return db.get(Instructor, instructor_id)


def get_instructor_by_email(db: Session, email: str) -> Optional[Instructor]:
    query = select(Instructor).where(func.lower(Instructor.email) == email.lower())
    return db.execute(query).scalars().first()


def get_instructor_classes(db: Session, instructor_id: str) -> List[instructor_schema.InstructorClass]:
    query = (
        select(InstructorClass.class_id, InstructorClass.class_name)
        .where(InstructorClass.instructor_id == instructor_id)
        .order_by(InstructorClass.class_name)
    )
    return [instructor_schema.InstructorClass.model_validate(row._asdict()) for row in db.execute(query).all()]


def to_view(db: Session, instructor: Instructor) -> instructor_schema.Instructor:
    classes = get_instructor_classes(db, instructor.id)
    return instructor_schema.Instructor(
        id=instructor.id,
        name=instructor.name,
        email=instructor.email,
        phone_number=instructor.phone_number,
        profile_photo_url=instructor.profile_photo_url,
        status=instructor.status,
        created_at=instructor.created_at,
        classes=classes,
        class_ids=[c.class_id for c in classes],
    )


def get_all_instructors(
    db: Session, page: int = 1, limit: int = 10, search: Optional[str] = None
) -> Tuple[List[instructor_schema.Instructor], int]:
    query = select(Instructor)
    pattern = like_pattern(search)
    if pattern:
        query = query.where(
            or_(func.lower(Instructor.name).like(pattern), func.lower(Instructor.email).like(pattern))
        )
    total = count_rows(db, query)
    query = query.order_by(Instructor.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    return [to_view(db, i) for i in db.execute(query).scalars().all()], total
