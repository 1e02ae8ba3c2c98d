# dancey_portal/api/v1/endpoints/checkin_route.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import checkin_crud, class_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import checkin_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])

CheckinType = Literal["upcoming", "ended", "all"]


@router.get("", response_model=checkin_schema.CheckinClassListResponse, summary="Classes with check-ins")
def get_classes_with_checkins(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    checkin_type: CheckinType = Query("upcoming", alias="type"),
    status_filter: Literal["true", "false", "all"] = Query("all", alias="status"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Classes that have check-ins, with the number of matching check-ins each.
    `type=upcoming` keeps check-ins scheduled from now on, `type=ended` the past ones.

    Access: **admin**, **super_admin**
    """
    classes, total = checkin_crud.get_classes_with_checkins(
        db, page=page, limit=limit, checkin_type=checkin_type, status=status_filter, search=search
    )
    return checkin_schema.CheckinClassListResponse(classes=classes, pagination=build_pagination(page, limit, total))


@router.get("/class/{class_id}", response_model=checkin_schema.ClassCheckinsResponse, summary="Check-ins of a class")
def get_class_checkins(
    class_id: str,
    checkin_type: CheckinType = Query("upcoming", alias="type"),
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_class = class_crud.get_class(db, class_id)
    if db_class is None:
        raise NotFoundError("Class not found")
    return checkin_schema.ClassCheckinsResponse(
        class_name=db_class.class_name,
        check_ins=checkin_crud.get_class_checkins(db, db_class, checkin_type),
    )


@router.patch("/{checkin_id}", response_model=checkin_schema.CheckinStatusResponse, summary="Update check-in status")
def update_checkin_status(
    checkin_id: str,
    body: checkin_schema.CheckinStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    checkin = checkin_crud.get_checkin(db, checkin_id)
    if checkin is None:
        raise NotFoundError("Check-in not found")
    checkin = checkin_crud.set_checkin_status(db, checkin, body.checkin_status)
    return checkin_schema.CheckinStatusResponse(id=checkin.id, checkin_status=checkin.checkin_status)


@router.delete("/{checkin_id}", response_model=dict, summary="Delete a check-in")
def delete_checkin(
    checkin_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    checkin = checkin_crud.get_checkin(db, checkin_id)
    if checkin is None:
        raise NotFoundError("Check-in not found")
    checkin_crud.delete_checkin(db, checkin)
    return {"success": True, "message": "Check-in deleted successfully"}
