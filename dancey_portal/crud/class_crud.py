from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from typing import List, Optional, Tuple

from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.enrollment_model import Enrollment
from dancey_portal.models.association_tables import ClassMembership, ClassPackClass
from dancey_portal.schemas.class_schema import (
    ClassListItem,
    IncompleteClass,
    ClassWithEnrollments,
    EnrolledUser,
)
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset
from dancey_portal.services.class_draft_service import compute_resume_step


def _search_filter(query, search: Optional[str]):
    pattern = like_pattern(search)
    if pattern:
        query = query.where(
            or_(
                func.lower(DanceClass.class_name).like(pattern),
                func.lower(DanceClass.class_description).like(pattern),
                func.lower(DanceClass.course_instructor).like(pattern),
            )
        )
    return query


def get_class(db: Session, class_id: str) -> Optional[DanceClass]:
    return db.get(DanceClass, class_id)


def get_completed_classes(
    db: Session,
    page: int = 1,
    limit: int = 10,
    status: str = "all",
    search: Optional[str] = None,
) -> Tuple[List[ClassListItem], int]:
    query = select(DanceClass).where(DanceClass.is_completed.is_(True))
    if status == "active":
        query = query.where(DanceClass.is_active.is_(True))
    elif status == "inactive":
        query = query.where(DanceClass.is_active.is_(False))
    query = _search_filter(query, search)

    total = count_rows(db, query)
    offset = page_offset(page, limit)
    query = query.order_by(DanceClass.created_at.desc()).offset(offset).limit(limit)

    items = []
    for position, db_class in enumerate(db.execute(query).scalars().all(), start=offset + 1):
        items.append(ClassListItem.model_validate({
            **class_fields(db_class),
            "display_id": str(position).zfill(3),
        }))
    return items, total


def count_classes(db: Session) -> Tuple[int, int]:
    """Number of (active, completed) classes."""
    active = db.execute(select(func.count(DanceClass.id)).where(DanceClass.is_active.is_(True))).scalar_one()
    completed = db.execute(select(func.count(DanceClass.id)).where(DanceClass.is_completed.is_(True))).scalar_one()
    return active, completed


def get_incomplete_classes(db: Session, search: Optional[str] = None) -> List[IncompleteClass]:
    query = select(DanceClass).where(DanceClass.is_completed.is_(False))
    query = _search_filter(query, search).order_by(DanceClass.created_at.desc())
    return [
        IncompleteClass.model_validate({**class_fields(c), "last_step": compute_resume_step(c)})
        for c in db.execute(query).scalars().all()
    ]


def get_available_classes(db: Session) -> List[DanceClass]:
    query = (
        select(DanceClass)
        .where(DanceClass.is_completed.is_(True), DanceClass.is_active.is_(True))
        .order_by(DanceClass.class_name)
    )
    return list(db.execute(query).scalars().all())


def get_classes_with_enrollments(db: Session) -> List[ClassWithEnrollments]:
    query = (
        select(DanceClass, Enrollment)
        .join(Enrollment, Enrollment.class_id == DanceClass.id)
        .order_by(DanceClass.class_name, Enrollment.enrolled_at)
    )
    grouped = {}
    for db_class, enrollment in db.execute(query).all():
        entry = grouped.setdefault(db_class.id, ClassWithEnrollments(
            id=db_class.id,
            class_name=db_class.class_name,
            course_instructor=db_class.course_instructor,
            enrolled_users=[],
        ))
        entry.enrolled_users.append(EnrolledUser(
            enrollment_id=enrollment.id,
            user_id=enrollment.user_id,
            user_name=enrollment.user_name,
            user_email=enrollment.user_email,
            status=enrollment.status.value,
            enrolled_at=enrollment.enrolled_at,
        ))
    return list(grouped.values())


def get_membership_ids(db: Session, class_id: str) -> List[str]:
    query = select(ClassMembership.membership_id).where(ClassMembership.class_id == class_id)
    return list(db.execute(query).scalars().all())


def get_class_pack_ids(db: Session, class_id: str) -> List[str]:
    query = select(ClassPackClass.class_pack_id).where(ClassPackClass.class_id == class_id)
    return list(db.execute(query).scalars().all())


def deactivate_class(db: Session, db_class: DanceClass) -> DanceClass:
    # is_completed stays as it is
    db_class.is_active = False
    db.commit()
    db.refresh(db_class)
    return db_class


def class_fields(db_class: DanceClass) -> dict:
    return {
        "id": db_class.id,
        "class_name": db_class.class_name,
        "class_description": db_class.class_description,
        "course_instructor": db_class.course_instructor,
        "image": db_class.image,
        "overview_video": db_class.overview_video,
        "schedule": db_class.schedule or [],
        "class_price": db_class.class_price or 0,
        "promotion_id": db_class.promotion_id,
        "is_active": db_class.is_active,
        "is_completed": db_class.is_completed,
        "rating": db_class.rating or 0.0,
        "created_at": db_class.created_at,
    }
