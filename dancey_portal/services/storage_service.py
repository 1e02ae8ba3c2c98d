"""
S3 storage for class thumbnails, class videos, profile photos and news images.
Handles uploads, presigned PUT URLs for large videos and deletion by URL or key.
"""
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote, urlparse

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from dancey_portal.config import (
    AWS_ACCESS_KEY_ID,
    AWS_REGION,
    AWS_SECRET_ACCESS_KEY,
    S3_BUCKET_NAME,
)
from dancey_portal.exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

# Image validation constants
MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
ALLOWED_IMAGE_MIME_TYPES = ["image/jpeg", "image/jpg", "image/png"]

# Video validation constants
MAX_VIDEO_SIZE_BYTES = 500 * 1024 * 1024  # 500MB
ALLOWED_VIDEO_MIME_TYPES = [
    "video/mp4",
    "video/quicktime",  # .mov
    "video/x-msvideo",  # .avi
    "video/avi",
    "video/mov",
]

PRESIGNED_URL_EXPIRES_SECONDS = 3600


def validate_image_file(size_bytes: int, mime_type: Optional[str]) -> Tuple[bool, Optional[str]]:
    if mime_type not in ALLOWED_IMAGE_MIME_TYPES:
        return False, "Invalid file type. Only JPEG and PNG images are allowed"
    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        return False, f"Image exceeds maximum of {MAX_IMAGE_SIZE_BYTES // (1024 * 1024)}MB"
    return True, None


def validate_video_file(size_bytes: int, mime_type: Optional[str]) -> Tuple[bool, Optional[str]]:
    if mime_type not in ALLOWED_VIDEO_MIME_TYPES:
        return False, "Invalid file type. Only MP4, MOV and AVI videos are allowed"
    if size_bytes > MAX_VIDEO_SIZE_BYTES:
        return False, f"Video exceeds maximum of {MAX_VIDEO_SIZE_BYTES // (1024 * 1024)}MB"
    return True, None


def sanitize_filename(filename: str) -> str:
    name = re.sub(r"[^A-Za-z0-9._-]+", "-", filename or "file").strip("-")
    return name or "file"


def build_key(prefix: str, filename: str) -> str:
    if prefix and not prefix.endswith("/"):
        prefix = prefix + "/"
    return f"{prefix}{int(time.time() * 1000)}-{sanitize_filename(filename)}"


def key_from_url(url_or_key: str) -> str:
    """Object key for a public URL; plain keys are returned unchanged."""
    if url_or_key.startswith("http://") or url_or_key.startswith("https://"):
        return unquote(urlparse(url_or_key).path.lstrip("/"))
    return url_or_key


@dataclass
class DeleteResult:
    deleted_count: int = 0
    failed_count: int = 0
    failed: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed_count == 0


class S3StorageService:
    """Process-wide S3 client wrapper. The boto3 client is created on first use."""

    def __init__(self, bucket: str = S3_BUCKET_NAME, region: str = AWS_REGION, client=None):
        self.bucket = bucket
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region,
                aws_access_key_id=AWS_ACCESS_KEY_ID,
                aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
                config=Config(signature_version="s3v4"),
            )
        return self._client

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for %s: %s", key, e, exc_info=True)
            raise ExternalServiceError("Failed to upload file")
        logger.info("Uploaded %s (%d bytes)", key, len(data))
        return self.public_url(key)

    def upload_image(self, prefix: str, filename: str, data: bytes, content_type: Optional[str]) -> Dict[str, str]:
        is_valid, error = validate_image_file(len(data), content_type)
        if not is_valid:
            raise ValidationError(error, field="file")
        key = build_key(prefix, filename)
        return {"url": self.upload(key, data, content_type), "key": key}

    def presigned_upload(self, prefix: str, file_name: str, file_type: str, file_size: int) -> Dict[str, str]:
        is_valid, error = validate_video_file(file_size, file_type)
        if not is_valid:
            raise ValidationError(error, field="file_type")
        key = build_key(prefix, file_name)
        try:
            presigned_url = self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": file_type},
                ExpiresIn=PRESIGNED_URL_EXPIRES_SECONDS,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Presigned URL generation failed for %s: %s", key, e, exc_info=True)
            raise ExternalServiceError("Failed to generate upload URL")
        return {"presigned_url": presigned_url, "final_url": self.public_url(key), "key": key}

    def delete(self, urls_or_keys: List[str]) -> DeleteResult:
        """Delete each object independently; failures are logged and counted."""
        result = DeleteResult()
        for item in urls_or_keys:
            if not item:
                continue
            key = key_from_url(item)
            try:
                self.client.delete_object(Bucket=self.bucket, Key=key)
                result.deleted_count += 1
            except (ClientError, BotoCoreError) as e:
                logger.warning("Failed to delete %s from S3: %s", key, e)
                result.failed_count += 1
                result.failed.append(item)
        return result


storage_service = S3StorageService()
