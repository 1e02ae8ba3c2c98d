from sqlalchemy import Column, String, Boolean, Numeric, Date, DateTime, Enum
from sqlalchemy.orm import relationship
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class PromotionStatus(str, enum.Enum):
    Active = "Active"
    Inactive = "Inactive"


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    promotion_name = Column(String(100), nullable=False)
    discount = Column(Numeric(5, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(Enum(PromotionStatus, name="promotion_status_enum"), default=PromotionStatus.Active, nullable=False)
    is_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    classes = relationship("DanceClass", back_populates="promotion")

    def __repr__(self):
        return f"<Promotion(name='{self.promotion_name}', discount={self.discount})>"
