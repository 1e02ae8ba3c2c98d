from sqlalchemy import Column, String, Boolean, Numeric, DateTime
from sqlalchemy.orm import relationship

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class ClassPack(Base):
    """
    A bundle of classes sold together. `price` is derived from the member
    classes and is only recomputed when the member set changes.
    """
    __tablename__ = "class_packs"

    id = Column(String(36), primary_key=True, default=new_uuid)
    pack_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    class_links = relationship(
        "ClassPackClass",
        back_populates="class_pack",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<ClassPack(name='{self.pack_name}', price={self.price})>"
