from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional, Tuple

from dancey_portal.models.rating_model import Rating, RatingStatus
from dancey_portal.models.enrollment_model import Enrollment
from dancey_portal.models.class_model import DanceClass
from dancey_portal.schemas.rating_schema import RatingView
from dancey_portal.services.service_helper import count_rows, page_offset


def get_rating_with_details_query():
    return (
        select(
            Rating.id,
            Rating.enrollment_id,
            Rating.class_id,
            DanceClass.class_name,
            Rating.user_id,
            Enrollment.user_name,
            Enrollment.user_email,
            Rating.rating,
            Rating.description,
            Rating.status,
            Rating.created_at,
            Rating.updated_at,
        )
        .outerjoin(Enrollment, Rating.enrollment_id == Enrollment.id)
        .outerjoin(DanceClass, Rating.class_id == DanceClass.id)
    )


def _to_view(row) -> RatingView:
    data = row._asdict()
    data["status"] = data["status"].value
    return RatingView.model_validate(data)


def get_rating(db: Session, rating_id: str) -> Optional[Rating]:
    return db.get(Rating, rating_id)


def get_all_ratings(
    db: Session, page: int = 1, limit: int = 10, status: Optional[str] = None
) -> Tuple[List[RatingView], int]:
    query = get_rating_with_details_query()
    if status:
        query = query.where(Rating.status == RatingStatus(status))
    total = count_rows(db, query)
    query = query.order_by(Rating.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    return [_to_view(row) for row in db.execute(query).all()], total


def get_approved_class_ratings(db: Session, class_id: str) -> List[RatingView]:
    query = (
        get_rating_with_details_query()
        .where(Rating.class_id == class_id, Rating.status == RatingStatus.approved)
        .order_by(Rating.created_at.desc())
    )
    return [_to_view(row) for row in db.execute(query).all()]


def set_rating_status(db: Session, db_rating: Rating, status: str) -> RatingView:
    db_rating.status = RatingStatus(status)
    db.commit()
    row = db.execute(get_rating_with_details_query().where(Rating.id == db_rating.id)).first()
    return _to_view(row)
