from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class Instructor(Base):
    __tablename__ = "instructors"

    # Same value as the Firebase uid of the instructor account
    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone_number = Column(String(20))
    profile_photo_url = Column(String(500))
    password_hash = Column(String(255), nullable=False)
    auto_generate_password = Column(Boolean, default=False, nullable=False)
    status = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    class_links = relationship(
        "InstructorClass",
        back_populates="instructor",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Instructor(id='{self.id}', name='{self.name}')>"
