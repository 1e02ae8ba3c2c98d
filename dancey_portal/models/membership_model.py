from sqlalchemy import Column, String, Boolean, Numeric, DateTime, Enum
from sqlalchemy.orm import relationship
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class MembershipStatus(str, enum.Enum):
    Active = "Active"
    Inactive = "Inactive"


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(String(36), primary_key=True, default=new_uuid)
    membership_name = Column(String(100), nullable=False)
    price_per_month = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(MembershipStatus, name="membership_status_enum"), default=MembershipStatus.Active, nullable=False)
    is_membership_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    class_links = relationship(
        "ClassMembership",
        back_populates="membership",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Membership(name='{self.membership_name}', status={self.status})>"
