# dancey_portal/api/v1/endpoints/profile_route.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import admin_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import admin_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import admin_service

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=admin_schema.Profile, summary="My profile")
def get_profile(
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_admin = admin_crud.get_admin(db, current_admin.id)
    if db_admin is None:
        raise NotFoundError("Admin not found")
    return admin_service.to_profile(db_admin)


@router.put("", response_model=admin_schema.Profile, summary="Update my profile")
def update_profile(
    profile_update: admin_schema.ProfileUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_admin = admin_service.update_profile(db, current_admin.id, profile_update)
    return admin_service.to_profile(db_admin)
