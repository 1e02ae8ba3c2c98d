# dancey_portal/models/association_tables.py
"""
Join tables between classes and the entities linked to them.

Each row carries the display names of both sides next to the two ids.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from dancey_portal.models.base_model import Base, utc_now


# ---- Class <-> Membership ----
class ClassMembership(Base):
    __tablename__ = "class_memberships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    membership_id = Column(String(36), ForeignKey("memberships.id", ondelete="CASCADE"), nullable=False, index=True)
    class_name = Column(String(100), nullable=False)
    membership_name = Column(String(100), nullable=False)

    class_ = relationship("DanceClass", back_populates="membership_links")
    membership = relationship("Membership", back_populates="class_links")


# ---- Class <-> ClassPack ----
class ClassPackClass(Base):
    __tablename__ = "class_pack_classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    class_pack_id = Column(String(36), ForeignKey("class_packs.id", ondelete="CASCADE"), nullable=False, index=True)
    class_name = Column(String(100), nullable=False)
    pack_name = Column(String(100), nullable=False)

    class_ = relationship("DanceClass", back_populates="pack_links")
    class_pack = relationship("ClassPack", back_populates="class_links")


# ---- Instructor <-> Class ----
class InstructorClass(Base):
    __tablename__ = "instructor_classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(String(36), ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    instructor_name = Column(String(100), nullable=False)
    class_name = Column(String(100), nullable=False)
    assigned_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    instructor = relationship("Instructor", back_populates="class_links")
    class_ = relationship("DanceClass", back_populates="instructor_links")
