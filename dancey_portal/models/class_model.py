from sqlalchemy import Column, String, Text, Boolean, Float, Numeric, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class DanceClass(Base):
    """
    A class offered by the studio.

    Rows are created as drafts by the first wizard step and filled in by the
    following steps. `schedule` holds the list of schedule entries as JSON.
    """
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=new_uuid)
    class_name = Column(String(100), nullable=False, default="")
    class_description = Column(Text, nullable=False, default="")
    course_instructor = Column(String(100), nullable=False, default="")

    image = Column(String(500), nullable=False, default="")
    overview_video = Column(String(500), nullable=False, default="")
    schedule = Column(JSON, nullable=False, default=list)

    class_price = Column(Numeric(10, 2), nullable=False, default=0)
    promotion_id = Column(String(36), ForeignKey("promotions.id", ondelete="SET NULL"), nullable=True)

    is_active = Column(Boolean, nullable=False, default=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    rating = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    promotion = relationship("Promotion", back_populates="classes")

    membership_links = relationship(
        "ClassMembership",
        back_populates="class_",
        cascade="all, delete-orphan"
    )
    pack_links = relationship(
        "ClassPackClass",
        back_populates="class_",
        cascade="all, delete-orphan"
    )
    instructor_links = relationship(
        "InstructorClass",
        back_populates="class_",
        cascade="all, delete-orphan"
    )
    enrollments = relationship(
        "Enrollment",
        back_populates="class_",
        cascade="all, delete-orphan"
    )
    ratings = relationship(
        "Rating",
        back_populates="class_",
        cascade="all, delete-orphan"
    )
    checkins = relationship(
        "ClassCheckin",
        back_populates="class_",
        cascade="all, delete-orphan"
    )

    def media_urls(self) -> list:
        return [url for url in (self.image, self.overview_video) if url]

    def __repr__(self):
        return f"<DanceClass(id='{self.id}', name='{self.class_name}', active={self.is_active})>"
