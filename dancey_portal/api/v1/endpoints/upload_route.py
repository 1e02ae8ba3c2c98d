# dancey_portal/api/v1/endpoints/upload_route.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_storage_service
from dancey_portal.config import (
    S3_CLASS_IMAGE_PATH,
    S3_CLASS_VIDEO_PATH,
    S3_NEWS_IMAGE_PATH,
    S3_PROFILE_IMAGE_PATH,
)
from dancey_portal.schemas import upload_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.storage_service import S3StorageService

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


async def _upload_image(storage: S3StorageService, file: UploadFile, prefix: str) -> upload_schema.UploadResponse:
    data = await file.read()
    result = storage.upload_image(prefix, file.filename or "image", data, file.content_type)
    return upload_schema.UploadResponse(**result)


@router.post("/thumbnail", response_model=upload_schema.UploadResponse, summary="Upload a class thumbnail")
async def upload_thumbnail(
    file: UploadFile = File(...),
    path: Optional[str] = Form(None),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    JPEG or PNG, at most 10MB.

    Access: **admin**, **super_admin**
    """
    return await _upload_image(storage, file, path or S3_CLASS_IMAGE_PATH)


@router.post("/profile", response_model=upload_schema.UploadResponse, summary="Upload a profile photo")
async def upload_profile_photo(
    file: UploadFile = File(...),
    path: Optional[str] = Form(None),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return await _upload_image(storage, file, path or S3_PROFILE_IMAGE_PATH)


@router.post("/news-image", response_model=upload_schema.UploadResponse, summary="Upload a news image")
async def upload_news_image(
    file: UploadFile = File(...),
    path: Optional[str] = Form(None),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return await _upload_image(storage, file, path or S3_NEWS_IMAGE_PATH)


@router.post("/video/presigned-url", response_model=upload_schema.PresignedUrlResponse, summary="Presigned video upload")
def create_video_upload_url(
    body: upload_schema.PresignedUrlRequest,
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Returns a PUT URL valid for one hour. The browser uploads the video
    directly and then sends `final_url` with the media step.

    Access: **admin**, **super_admin**
    """
    result = storage.presigned_upload(S3_CLASS_VIDEO_PATH, body.file_name, body.file_type, body.file_size)
    return upload_schema.PresignedUrlResponse(**result)


@router.post("/delete", response_model=upload_schema.DeleteFilesResponse, summary="Delete uploaded files")
def delete_files(
    body: upload_schema.DeleteFilesRequest,
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    result = storage.delete(body.urls)
    return upload_schema.DeleteFilesResponse(
        success=result.success,
        deleted_count=result.deleted_count,
        failed_count=result.failed_count,
    )
