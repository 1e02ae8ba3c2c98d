# dancey_portal/services/admin_service.py
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dancey_portal.crud import admin_crud
from dancey_portal.database import atomic
from dancey_portal.exceptions import ConflictError, NotFoundError
from dancey_portal.models.admin_user_model import AdminRole, AdminStatus, AdminUser
from dancey_portal.schemas.admin_schema import AdminCreate, AdminUpdate, Profile, ProfileUpdate
from dancey_portal.services.service_helper import generate_password

logger = logging.getLogger(__name__)


# ----- VALIDATION -----

def _ensure_email_free(db: Session, email: str, exclude_id: Optional[str] = None) -> None:
    if admin_crud.get_admin_by_email(db, email, exclude_id=exclude_id):
        raise ConflictError("An admin with this email already exists", field="email")


def _get_or_404(db: Session, admin_id: str) -> AdminUser:
    db_admin = admin_crud.get_admin(db, admin_id)
    if db_admin is None:
        raise NotFoundError("Admin not found")
    return db_admin


# ----- ADMIN DIRECTORY -----

def create_admin(db: Session, admin_in: AdminCreate) -> Tuple[AdminUser, Optional[str]]:
    """
    Create an admin. When no password is given one is generated and returned
    so it can be handed over once.
    """
    _ensure_email_free(db, admin_in.email)

    generated = None
    password = admin_in.password
    if not password:
        generated = password = generate_password()

    with atomic(db):
        db_admin = AdminUser(
            name=admin_in.name.strip(),
            email=admin_in.email,
            phone_number=admin_in.phone_number,
            role=AdminRole(admin_in.role),
            status=AdminStatus(admin_in.status),
            img_url=admin_in.img_url,
        )
        db_admin.set_password(password)
        db.add(db_admin)
    db.refresh(db_admin)
    logger.info("Created admin %s (%s)", db_admin.id, db_admin.email)
    return db_admin, generated


def update_admin(db: Session, admin_id: str, admin_update: AdminUpdate) -> AdminUser:
    db_admin = _get_or_404(db, admin_id)
    update_data = admin_update.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in update_data:
        _ensure_email_free(db, update_data["email"], exclude_id=admin_id)

    with atomic(db):
        password = update_data.pop("password", None)
        if password:
            db_admin.set_password(password)
        if "role" in update_data:
            update_data["role"] = AdminRole(update_data["role"])
        if "status" in update_data:
            update_data["status"] = AdminStatus(update_data["status"])
        for key, value in update_data.items():
            setattr(db_admin, key, value)
    db.refresh(db_admin)
    return db_admin


def set_admin_status(db: Session, admin_id: str, status: str) -> AdminUser:
    db_admin = _get_or_404(db, admin_id)
    with atomic(db):
        db_admin.status = AdminStatus(status)
    db.refresh(db_admin)
    return db_admin


def delete_admin(db: Session, admin_id: str) -> None:
    admin_crud.delete_admin(db, _get_or_404(db, admin_id))
    logger.info("Deleted admin %s", admin_id)


# ----- PROFILE -----

def split_name(name: str) -> Tuple[str, str]:
    parts = (name or "").strip().split(" ", 1)
    first = parts[0] if parts else ""
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last


def to_profile(db_admin: AdminUser) -> Profile:
    first_name, last_name = split_name(db_admin.name)
    return Profile(
        id=db_admin.id,
        name=db_admin.name,
        first_name=first_name,
        last_name=last_name,
        email=db_admin.email,
        phone_number=db_admin.phone_number,
        role=db_admin.role.value,
        img_url=db_admin.img_url,
        last_login=db_admin.last_login,
    )


def update_profile(db: Session, admin_id: str, profile_update: ProfileUpdate) -> AdminUser:
    db_admin = _get_or_404(db, admin_id)
    update_data = profile_update.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in update_data:
        _ensure_email_free(db, update_data["email"], exclude_id=admin_id)

    with atomic(db):
        if "first_name" in update_data or "last_name" in update_data:
            first_name, last_name = split_name(db_admin.name)
            first_name = update_data.pop("first_name", first_name).strip()
            last_name = update_data.pop("last_name", last_name).strip()
            db_admin.name = f"{first_name} {last_name}".strip()
        for key, value in update_data.items():
            setattr(db_admin, key, value)
    db.refresh(db_admin)
    return db_admin
