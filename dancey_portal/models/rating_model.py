from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class RatingStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Rating(Base):
    __tablename__ = "ratings"

    id = Column(String(36), primary_key=True, default=new_uuid)
    enrollment_id = Column(String(36), ForeignKey("enrollments.id", ondelete="CASCADE"), unique=True, nullable=False)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False)
    rating = Column(Integer, nullable=False)
    description = Column(Text)
    status = Column(Enum(RatingStatus, name="rating_status_enum"), default=RatingStatus.pending, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    enrollment = relationship("Enrollment", back_populates="rating")
    class_ = relationship("DanceClass", back_populates="ratings")

    def __repr__(self):
        return f"<Rating(class_id='{self.class_id}', rating={self.rating}, status={self.status})>"
