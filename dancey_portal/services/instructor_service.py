# dancey_portal/services/instructor_service.py
"""
Instructor accounts.

An instructor exists both as a database row and as a Firebase account with
the same id. Creation and deletion touch both inside one database
transaction: when the Firebase call fails the database work is rolled back.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dancey_portal.crud import instructor_crud
from dancey_portal.database import atomic
from dancey_portal.exceptions import ConflictError, NotFoundError
from dancey_portal.models.admin_user_model import hash_password
from dancey_portal.models.instructor_model import Instructor
from dancey_portal.schemas.instructor_schema import InstructorCreate, InstructorUpdate
from dancey_portal.services.identity_service import FirebaseIdentityService
from dancey_portal.services.relationship_service import (
    INSTRUCTOR_CLASSES,
    class_name_lookup,
    sync_relationships,
)
from dancey_portal.services.service_helper import generate_password

logger = logging.getLogger(__name__)

INSTRUCTOR_CLAIMS = {"role": "instructor", "premium": True}


def _get_or_404(db: Session, instructor_id: str) -> Instructor:
    instructor = instructor_crud.get_instructor(db, instructor_id)
    if instructor is None:
        raise NotFoundError("Instructor not found")
    return instructor


def create_instructor(
    db: Session, identity: FirebaseIdentityService, instructor_in: InstructorCreate
) -> Tuple[Instructor, Optional[str]]:
    # 1. Email must be unused
    if instructor_crud.get_instructor_by_email(db, instructor_in.email):
        raise ConflictError("An instructor with this email already exists", field="email")

    # 2. Password
    generated = None
    password = instructor_in.password
    if instructor_in.auto_generate_password:
        generated = password = generate_password()

    with atomic(db):
        # 3. Row + class links
        instructor = Instructor(
            name=instructor_in.name.strip(),
            email=instructor_in.email,
            phone_number=instructor_in.phone_number,
            profile_photo_url=instructor_in.profile_photo_url,
            password_hash=hash_password(password),
            auto_generate_password=instructor_in.auto_generate_password,
            status=True,
        )
        db.add(instructor)
        db.flush()
        sync_relationships(db, INSTRUCTOR_CLASSES, instructor.id, instructor.name, instructor_in.class_ids, class_name_lookup)

        # 4. Firebase account, same id as the row
        identity.create_identity(
            uid=instructor.id,
            email=instructor.email,
            password=password,
            display_name=instructor.name,
            photo_url=instructor.profile_photo_url,
        )
        identity.set_claims(instructor.id, INSTRUCTOR_CLAIMS)

    db.refresh(instructor)
    logger.info("Created instructor %s (%s)", instructor.id, instructor.email)
    return instructor, generated


def update_instructor(db: Session, instructor_id: str, instructor_update: InstructorUpdate) -> Instructor:
    with atomic(db):
        instructor = _get_or_404(db, instructor_id)
        update_data = instructor_update.model_dump(exclude_unset=True, exclude_none=True, exclude={"class_ids"})
        for key, value in update_data.items():
            setattr(instructor, key, value)
        if instructor_update.class_ids is not None:
            sync_relationships(
                db, INSTRUCTOR_CLASSES, instructor.id, instructor.name, instructor_update.class_ids, class_name_lookup
            )
    db.refresh(instructor)
    return instructor


def set_instructor_status(
    db: Session, identity: FirebaseIdentityService, instructor_id: str, status: bool
) -> Instructor:
    instructor = _get_or_404(db, instructor_id)
    identity.disable_identity(instructor.id, disabled=not status)
    with atomic(db):
        instructor.status = status
    db.refresh(instructor)
    return instructor


def delete_instructor(db: Session, identity: FirebaseIdentityService, instructor_id: str) -> Optional[str]:
    """
    Delete the instructor and the Firebase account. Returns the profile photo
    URL so the caller can remove the file.
    """
    with atomic(db):
        instructor = _get_or_404(db, instructor_id)
        photo_url = instructor.profile_photo_url
        email = instructor.email
        db.delete(instructor)
        db.flush()
        identity.delete_identity_by_email(email)
    logger.info("Deleted instructor %s", instructor_id)
    return photo_url
