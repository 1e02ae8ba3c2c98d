# dancey_portal/api/v1/endpoints/admin_route.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import admin_crud
from dancey_portal.exceptions import ConflictError, NotFoundError
from dancey_portal.schemas import admin_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import admin_service
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=admin_schema.AdminListResponse, summary="List admins")
def get_admins(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    admins, total = admin_crud.get_all_admins(db, page=page, limit=limit, search=search)
    active, inactive = admin_crud.count_by_status(db)
    return admin_schema.AdminListResponse(
        admins=admins,
        pagination=build_pagination(page, limit, total),
        active_count=active,
        inactive_count=inactive,
    )


@router.post(
    "",
    response_model=admin_schema.AdminCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin"
)
def create_admin(
    admin_in: admin_schema.AdminCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Create a portal account. Without `password` one is generated and returned once.

    Access: **admin**, **super_admin**
    """
    db_admin, generated = admin_service.create_admin(db, admin_in)
    response = admin_schema.AdminCreateResponse.model_validate(db_admin)
    response.generated_password = generated
    return response


@router.get("/{admin_id}", response_model=admin_schema.Admin, summary="Get an admin")
def get_admin(
    admin_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_admin = admin_crud.get_admin(db, admin_id)
    if db_admin is None:
        raise NotFoundError("Admin not found")
    return db_admin


@router.put("/{admin_id}", response_model=admin_schema.Admin, summary="Update an admin")
def update_admin(
    admin_id: str,
    admin_update: admin_schema.AdminUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return admin_service.update_admin(db, admin_id, admin_update)


@router.patch("/{admin_id}/toggle-status", response_model=admin_schema.Admin, summary="Activate or deactivate an admin")
def toggle_admin_status(
    admin_id: str,
    body: admin_schema.AdminStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    if admin_id == current_admin.id and body.status == "inactive":
        raise ConflictError("You cannot deactivate your own account")
    return admin_service.set_admin_status(db, admin_id, body.status)


@router.delete("/{admin_id}", response_model=dict, summary="Delete an admin")
def delete_admin(
    admin_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    if admin_id == current_admin.id:
        raise ConflictError("You cannot delete your own account")
    admin_service.delete_admin(db, admin_id)
    return {"success": True, "message": "Admin deleted successfully"}
