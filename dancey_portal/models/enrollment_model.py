from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class EnrollmentStatus(str, enum.Enum):
    active = "active"
    cancelled = "cancelled"
    completed = "completed"


class Enrollment(Base):
    """
    Enrollment of an app user (Firebase uid) in a class. Rows are written by
    the mobile app; the portal only reads them.
    """
    __tablename__ = "enrollments"

    id = Column(String(36), primary_key=True, default=new_uuid)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    user_name = Column(String(100))
    user_email = Column(String(255))
    user_phone = Column(String(20))
    status = Column(Enum(EnrollmentStatus, name="enrollment_status_enum"), default=EnrollmentStatus.active, nullable=False)
    enrolled_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    class_ = relationship("DanceClass", back_populates="enrollments")
    rating = relationship("Rating", back_populates="enrollment", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Enrollment(user_id='{self.user_id}', class_id='{self.class_id}', status={self.status})>"
