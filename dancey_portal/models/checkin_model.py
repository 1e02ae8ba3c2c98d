from sqlalchemy import Column, String, Date, Time, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class ClassCheckin(Base):
    __tablename__ = "class_checkins"

    id = Column(String(36), primary_key=True, default=new_uuid)
    enrollment_id = Column(String(36), ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False)
    checkin_date = Column(Date)
    checkin_time = Column(Time)
    # Stored as the text 'true' / 'false'
    checkin_status = Column(String(5), nullable=False, default="false")
    schedule_id = Column(String(36))
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    class_ = relationship("DanceClass", back_populates="checkins")
    enrollment = relationship("Enrollment")

    def __repr__(self):
        return f"<ClassCheckin(class_id='{self.class_id}', user_id='{self.user_id}', status={self.checkin_status})>"
