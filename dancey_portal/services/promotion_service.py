# dancey_portal/services/promotion_service.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from dancey_portal.crud import promotion_crud
from dancey_portal.database import atomic
from dancey_portal.exceptions import ValidationError
from dancey_portal.models.promotion_model import Promotion, PromotionStatus
from dancey_portal.schemas.promotion_schema import PromotionUpdate

logger = logging.getLogger(__name__)


def update_promotion(db: Session, db_promotion: Promotion, promotion_update: PromotionUpdate) -> Promotion:
    new_start = promotion_update.start_date or db_promotion.start_date
    new_end = promotion_update.end_date or db_promotion.end_date
    if new_end < new_start:
        raise ValidationError("end_date must not be before start_date", field="end_date")
    return promotion_crud.update_promotion(db, db_promotion, promotion_update)


def deactivate_expired_promotions(db: Session, today: Optional[date] = None) -> int:
    """
    Turn off every promotion whose end date has passed.
    Runs from the nightly scheduler; returns the number of promotions changed.
    """
    today = today or date.today()
    with atomic(db):
        result = db.execute(
            update(Promotion)
            .where(Promotion.end_date < today, Promotion.status == PromotionStatus.Active)
            .values(status=PromotionStatus.Inactive, is_enabled=False)
            .execution_options(synchronize_session=False)
        )
    logger.info("Deactivated %d expired promotions", result.rowcount)
    return result.rowcount
