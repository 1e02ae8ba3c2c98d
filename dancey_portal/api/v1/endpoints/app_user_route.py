# dancey_portal/api/v1/endpoints/app_user_route.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_identity_service
from dancey_portal.schemas import app_user_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.identity_service import FirebaseIdentityService
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=app_user_schema.AppUserListResponse, summary="List app users")
def get_app_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    identity: FirebaseIdentityService = Depends(get_identity_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Users of the mobile app, read from Firestore.

    Access: **admin**, **super_admin**
    """
    users, total = identity.list_app_users(page, limit, search)
    return app_user_schema.AppUserListResponse(users=users, pagination=build_pagination(page, limit, total))


@router.patch("/{user_id}/toggle-status", response_model=dict, summary="Activate or deactivate an app user")
def toggle_app_user_status(
    user_id: str,
    body: app_user_schema.AppUserStatusUpdate,
    identity: FirebaseIdentityService = Depends(get_identity_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    identity.set_app_user_status(user_id, body.status)
    return {"success": True, "id": user_id, "status": body.status}
