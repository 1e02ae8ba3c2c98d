# dancey_portal/api/v1/endpoints/class_pack_route.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import class_pack_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import class_pack_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import class_pack_service
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=class_pack_schema.ClassPackListResponse, summary="List class packs")
def get_class_packs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    status_filter: Literal["active", "inactive", "all"] = Query("all", alias="status"),
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    packs, total = class_pack_crud.get_all_class_packs(db, page=page, limit=limit, search=search, status=status_filter)
    return class_pack_schema.ClassPackListResponse(class_packs=packs, pagination=build_pagination(page, limit, total))


@router.post(
    "",
    response_model=class_pack_schema.ClassPackView,
    status_code=status.HTTP_201_CREATED,
    summary="Create a class pack"
)
def create_class_pack(
    pack_in: class_pack_schema.ClassPackCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Create a pack from existing classes. The price is the sum of the class
    prices minus the optional discount.

    Access: **admin**, **super_admin**
    """
    return class_pack_service.create_class_pack(db, pack_in)


@router.get("/{pack_id}", response_model=class_pack_schema.ClassPackView, summary="Get a class pack")
def get_class_pack(
    pack_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    pack = class_pack_crud.get_class_pack(db, pack_id)
    if pack is None:
        raise NotFoundError("Class pack not found")
    return class_pack_crud.to_view(db, pack)


@router.put("/{pack_id}", response_model=class_pack_schema.ClassPackUpdateResponse, summary="Update a class pack")
def update_class_pack(
    pack_id: str,
    pack_in: class_pack_schema.ClassPackUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Replace the pack's classes. The price is only recomputed when the set of
    classes changed.

    Access: **admin**, **super_admin**
    """
    view, changed = class_pack_service.update_class_pack(db, pack_id, pack_in)
    return class_pack_schema.ClassPackUpdateResponse(**view.model_dump(), price_recomputed=changed)


@router.delete("/{pack_id}", response_model=dict, summary="Delete a class pack")
def delete_class_pack(
    pack_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    class_pack_service.delete_class_pack(db, pack_id)
    return {"success": True, "message": "Class pack deleted successfully"}
