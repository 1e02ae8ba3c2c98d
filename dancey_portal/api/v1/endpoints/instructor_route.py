# dancey_portal/api/v1/endpoints/instructor_route.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db, get_identity_service, get_storage_service
from dancey_portal.crud import instructor_crud
from dancey_portal.exceptions import NotFoundError, warn_partial_side_effect
from dancey_portal.schemas import instructor_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import instructor_service
from dancey_portal.services.identity_service import FirebaseIdentityService
from dancey_portal.services.service_helper import build_pagination
from dancey_portal.services.storage_service import S3StorageService

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=instructor_schema.InstructorListResponse, summary="List instructors")
def get_instructors(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    instructors, total = instructor_crud.get_all_instructors(db, page=page, limit=limit, search=search)
    return instructor_schema.InstructorListResponse(instructors=instructors, pagination=build_pagination(page, limit, total))


@router.post(
    "",
    response_model=instructor_schema.InstructorCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an instructor"
)
def create_instructor(
    instructor_in: instructor_schema.InstructorCreate,
    db: Session = Depends(get_db),
    identity: FirebaseIdentityService = Depends(get_identity_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Create the instructor, link the selected classes and open the Firebase
    account with the instructor claims.

    Access: **admin**, **super_admin**
    """
    instructor, generated = instructor_service.create_instructor(db, identity, instructor_in)
    view = instructor_crud.to_view(db, instructor)
    return instructor_schema.InstructorCreateResponse(**view.model_dump(), generated_password=generated)


@router.get("/{instructor_id}", response_model=instructor_schema.Instructor, summary="Get an instructor")
def get_instructor(
    instructor_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    instructor = instructor_crud.get_instructor(db, instructor_id)
    if instructor is None:
        raise NotFoundError("Instructor not found")
    return instructor_crud.to_view(db, instructor)


@router.put("/{instructor_id}", response_model=instructor_schema.Instructor, summary="Update an instructor")
def update_instructor(
    instructor_id: str,
    instructor_update: instructor_schema.InstructorUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Update profile fields and replace the instructor's classes.

    Access: **admin**, **super_admin**
    """
    instructor = instructor_service.update_instructor(db, instructor_id, instructor_update)
    return instructor_crud.to_view(db, instructor)


@router.patch(
    "/{instructor_id}/toggle-status",
    response_model=instructor_schema.Instructor,
    summary="Enable or disable an instructor"
)
def toggle_instructor_status(
    instructor_id: str,
    body: instructor_schema.InstructorStatusUpdate,
    db: Session = Depends(get_db),
    identity: FirebaseIdentityService = Depends(get_identity_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    instructor = instructor_service.set_instructor_status(db, identity, instructor_id, body.status)
    return instructor_crud.to_view(db, instructor)


@router.delete("/{instructor_id}", response_model=dict, summary="Delete an instructor")
def delete_instructor(
    instructor_id: str,
    db: Session = Depends(get_db),
    identity: FirebaseIdentityService = Depends(get_identity_service),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    photo_url = instructor_service.delete_instructor(db, identity, instructor_id)

    photo_deleted = True
    if photo_url:
        result = storage.delete([photo_url])
        if result.failed:
            photo_deleted = False
            warn_partial_side_effect("could not delete instructor photo %s", photo_url)
    return {"success": True, "message": "Instructor deleted successfully", "photo_deleted": photo_deleted}
