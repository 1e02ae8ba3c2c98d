# dancey_portal/api/v1/endpoints/membership_route.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import membership_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import membership_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


def _get_or_404(db: Session, membership_id: str):
    db_membership = membership_crud.get_membership(db, membership_id)
    if db_membership is None:
        raise NotFoundError("Membership not found")
    return db_membership


@router.get("", response_model=membership_schema.MembershipListResponse, summary="List memberships")
def get_memberships(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    memberships, total = membership_crud.get_all_memberships(db, page=page, limit=limit, search=search)
    return membership_schema.MembershipListResponse(
        memberships=[membership_crud.to_view(m) for m in memberships],
        pagination=build_pagination(page, limit, total),
    )


@router.post(
    "",
    response_model=membership_schema.Membership,
    status_code=status.HTTP_201_CREATED,
    summary="Create a membership"
)
def create_membership(
    membership_in: membership_schema.MembershipCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    `price_per_month` accepts text such as "$30/month".

    Access: **admin**, **super_admin**
    """
    return membership_crud.to_view(membership_crud.create_membership(db, membership_in))


@router.get("/{membership_id}", response_model=membership_schema.Membership, summary="Get a membership")
def get_membership(
    membership_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return membership_crud.to_view(_get_or_404(db, membership_id))


@router.put("/{membership_id}", response_model=membership_schema.Membership, summary="Update a membership")
def update_membership(
    membership_id: str,
    membership_update: membership_schema.MembershipUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_membership = _get_or_404(db, membership_id)
    return membership_crud.to_view(membership_crud.update_membership(db, db_membership, membership_update))


@router.patch("/{membership_id}/toggle-status", response_model=membership_schema.Membership, summary="Enable or disable")
def toggle_membership(
    membership_id: str,
    body: membership_schema.MembershipToggle,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_membership = _get_or_404(db, membership_id)
    return membership_crud.to_view(membership_crud.set_membership_enabled(db, db_membership, body.enabled))


@router.delete("/{membership_id}", response_model=dict, summary="Delete a membership")
def delete_membership(
    membership_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    membership_crud.delete_membership(db, _get_or_404(db, membership_id))
    return {"success": True, "message": "Membership deleted successfully"}
