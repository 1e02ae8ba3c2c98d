from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, cast, String
from typing import List, Optional, Tuple

from dancey_portal.models.promotion_model import Promotion, PromotionStatus
from dancey_portal.schemas.promotion_schema import PromotionCreate, PromotionUpdate, discount_value
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset


def get_promotion(db: Session, promotion_id: str) -> Optional[Promotion]:
    return db.get(Promotion, promotion_id)


def get_all_promotions(
    db: Session, page: int = 1, limit: int = 10, search: Optional[str] = None
) -> Tuple[List[Promotion], int]:
    query = select(Promotion)
    pattern = like_pattern(search)
    if pattern:
        query = query.where(
            or_(
                func.lower(Promotion.promotion_name).like(pattern),
                func.lower(cast(Promotion.status, String)).like(pattern),
            )
        )
    total = count_rows(db, query)
    query = query.order_by(Promotion.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    return list(db.execute(query).scalars().all()), total


def create_promotion(db: Session, promotion_in: PromotionCreate) -> Promotion:
    data = promotion_in.model_dump()
    data["discount"] = promotion_in.discount_decimal()
    data["status"] = PromotionStatus(data["status"])
    db_promotion = Promotion(**data)
    db.add(db_promotion)
    db.commit()
    db.refresh(db_promotion)
    return db_promotion


def update_promotion(db: Session, db_promotion: Promotion, promotion_update: PromotionUpdate) -> Promotion:
    update_data = promotion_update.model_dump(exclude_unset=True, exclude_none=True)
    if "discount" in update_data:
        update_data["discount"] = discount_value(update_data["discount"])
    if "status" in update_data:
        update_data["status"] = PromotionStatus(update_data["status"])
    for key, value in update_data.items():
        setattr(db_promotion, key, value)
    db.commit()
    db.refresh(db_promotion)
    return db_promotion


def delete_promotion(db: Session, db_promotion: Promotion) -> None:
    db.delete(db_promotion)
    db.commit()
