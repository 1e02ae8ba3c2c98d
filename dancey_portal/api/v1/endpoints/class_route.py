# dancey_portal/api/v1/endpoints/class_route.py
import logging
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_class_draft_service, get_db, get_storage_service
from dancey_portal.crud import class_crud
from dancey_portal.exceptions import NotFoundError, warn_partial_side_effect
from dancey_portal.schemas import class_schema, schedule_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import schedule_service
from dancey_portal.services.class_draft_service import ClassDraftService, compute_resume_step
from dancey_portal.services.service_helper import build_pagination
from dancey_portal.services.storage_service import S3StorageService

logger = logging.getLogger(__name__)

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


def _delete_media(storage: S3StorageService, urls: List[str]) -> List[str]:
    """Remove media from storage; returns the URLs that are still there."""
    if not urls:
        return []
    result = storage.delete(urls)
    if result.failed:
        warn_partial_side_effect("could not delete media %s", result.failed)
    return result.failed


def _detail(db_class) -> class_schema.ClassDetail:
    return class_schema.ClassDetail.model_validate(class_crud.class_fields(db_class))


# ----- LISTS -----

@router.get("", response_model=class_schema.ClassListResponse, summary="List completed classes")
def get_classes(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Literal["active", "inactive", "all"] = Query("all", alias="status"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Completed classes with search and active/inactive filter.

    Access: **admin**, **super_admin**
    """
    classes, total = class_crud.get_completed_classes(db, page=page, limit=limit, status=status_filter, search=search)
    total_active, total_completed = class_crud.count_classes(db)
    return class_schema.ClassListResponse(
        classes=classes,
        pagination=build_pagination(page, limit, total),
        total_active_classes=total_active,
        total_completed_classes=total_completed,
    )


@router.get("/incomplete", response_model=class_schema.IncompleteClassListResponse, summary="List draft classes")
def get_incomplete_classes(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Drafts with the wizard step each one should resume at (`last_step`).

    Access: **admin**, **super_admin**
    """
    return class_schema.IncompleteClassListResponse(classes=class_crud.get_incomplete_classes(db, search=search))


@router.get("/available", response_model=List[class_schema.AvailableClass], summary="Active classes")
def get_available_classes(
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return class_crud.get_available_classes(db)


@router.get("/enrolled", response_model=List[class_schema.ClassWithEnrollments], summary="Classes with enrolled users")
def get_enrolled_classes(
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return class_crud.get_classes_with_enrollments(db)


# ----- WIZARD -----

@router.post(
    "/draft",
    response_model=class_schema.DraftResponse,
    summary="Save one step of the class wizard"
)
def upsert_draft(
    request: class_schema.DraftUpsertRequest,
    service: ClassDraftService = Depends(get_class_draft_service),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Persist the fields of one wizard step (`details`, `media`, `schedule`, `pricing`).

    The `details` step without `class_id` creates the draft. Replaced media files
    are removed from storage; the ones that could not be removed are returned in
    `replaced_media_urls`.

    Access: **admin**, **super_admin**
    """
    result = service.upsert_draft(request.fields, request.class_id)
    pending = _delete_media(storage, result.replaced_media_urls)
    return class_schema.DraftResponse(
        id=result.dance_class.id,
        resume_step=compute_resume_step(result.dance_class),
        dance_class=_detail(result.dance_class),
        replaced_media_urls=pending,
    )


@router.get("/draft/{class_id}", response_model=class_schema.DraftResponse, summary="Resume a draft")
def get_draft(
    class_id: str,
    service: ClassDraftService = Depends(get_class_draft_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_class = service.get_class(class_id)
    return class_schema.DraftResponse(
        id=db_class.id,
        resume_step=compute_resume_step(db_class),
        dance_class=_detail(db_class),
    )


@router.get("/{class_id}/resume-step", response_model=class_schema.ResumeStepResponse, summary="Wizard resume step")
def get_resume_step(
    class_id: str,
    service: ClassDraftService = Depends(get_class_draft_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return class_schema.ResumeStepResponse(id=class_id, step_index=service.resume_step(class_id))


@router.post("/{class_id}/activate", response_model=class_schema.ActivateResponse, summary="Activate a class")
def activate_class(
    class_id: str,
    service: ClassDraftService = Depends(get_class_draft_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Make the class visible to app users. Marks it completed as well.

    Access: **admin**, **super_admin**
    """
    db_class = service.activate(class_id)
    return class_schema.ActivateResponse(id=db_class.id, is_active=db_class.is_active, is_completed=db_class.is_completed)


@router.patch("/{class_id}/toggle-status", response_model=class_schema.ActivateResponse, summary="Activate or deactivate")
def toggle_class_status(
    class_id: str,
    body: class_schema.ToggleStatusRequest,
    db: Session = Depends(get_db),
    service: ClassDraftService = Depends(get_class_draft_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    if body.is_active:
        db_class = service.activate(class_id)
    else:
        db_class = class_crud.get_class(db, class_id)
        if db_class is None:
            raise NotFoundError("Class not found")
        db_class = class_crud.deactivate_class(db, db_class)
    return class_schema.ActivateResponse(id=db_class.id, is_active=db_class.is_active, is_completed=db_class.is_completed)


@router.delete("/{class_id}", response_model=class_schema.DeleteClassResponse, summary="Delete an inactive class")
def delete_class(
    class_id: str,
    service: ClassDraftService = Depends(get_class_draft_service),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Delete a class that is not active, then its media files.

    Access: **admin**, **super_admin**
    """
    media_urls = service.delete_draft(class_id)
    pending = _delete_media(storage, media_urls)
    return class_schema.DeleteClassResponse(
        message="Class deleted successfully",
        media_urls=media_urls,
        pending_media_urls=pending,
    )


# ----- SINGLE CLASS -----

@router.get("/{class_id}", response_model=class_schema.ClassDetail, summary="Get a class")
def get_class(
    class_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_class = class_crud.get_class(db, class_id)
    if db_class is None:
        raise NotFoundError("Class not found")
    return _detail(db_class)


@router.get("/{class_id}/memberships", response_model=class_schema.LinkedIdsResponse, summary="Linked memberships")
def get_class_memberships(
    class_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    if class_crud.get_class(db, class_id) is None:
        raise NotFoundError("Class not found")
    return class_schema.LinkedIdsResponse(class_id=class_id, ids=class_crud.get_membership_ids(db, class_id))


@router.get("/{class_id}/class-packs", response_model=class_schema.LinkedIdsResponse, summary="Linked class packs")
def get_class_class_packs(
    class_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    if class_crud.get_class(db, class_id) is None:
        raise NotFoundError("Class not found")
    return class_schema.LinkedIdsResponse(class_id=class_id, ids=class_crud.get_class_pack_ids(db, class_id))


# ----- SCHEDULE -----

@router.get("/{class_id}/schedule", response_model=List[schedule_schema.ScheduleEntry], summary="Schedule entries")
def get_schedule(
    class_id: str,
    on_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return schedule_service.list_entries(db, class_id, on_date)


@router.post(
    "/{class_id}/schedule",
    response_model=schedule_schema.ScheduleEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Add a schedule entry"
)
def add_schedule_entry(
    class_id: str,
    entry: schedule_schema.ScheduleEntryCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return schedule_service.add_entry(db, class_id, entry)


@router.put("/{class_id}/schedule/{schedule_id}", response_model=schedule_schema.ScheduleEntry, summary="Update a schedule entry")
def update_schedule_entry(
    class_id: str,
    schedule_id: str,
    changes: schedule_schema.ScheduleEntryUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return schedule_service.update_entry(db, class_id, schedule_id, changes)


@router.delete("/{class_id}/schedule/{schedule_id}", response_model=dict, summary="Delete a schedule entry")
def delete_schedule_entry(
    class_id: str,
    schedule_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    schedule_service.remove_entry(db, class_id, schedule_id)
    return {"success": True, "message": "Schedule entry deleted"}
