import boto3
import pytest
from botocore.client import Config
from botocore.stub import ANY, Stubber

from dancey_portal.exceptions import ExternalServiceError, ValidationError
from dancey_portal.services.storage_service import (
    S3StorageService,
    build_key,
    key_from_url,
    sanitize_filename,
    validate_image_file,
    validate_video_file,
)

BUCKET = "test-bucket"


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )


@pytest.fixture
def service(s3_client):
    return S3StorageService(bucket=BUCKET, region="us-east-1", client=s3_client)


# ----- HELPERS -----

def test_key_from_url():
    url = f"https://{BUCKET}.s3.us-east-1.amazonaws.com/web-admin/uploads/my%20photo.png"
    assert key_from_url(url) == "web-admin/uploads/my photo.png"
    assert key_from_url("web-admin/uploads/a.png") == "web-admin/uploads/a.png"


def test_build_key_sanitizes_filename():
    key = build_key("web-admin/uploads", "My Class (1).png")
    assert key.startswith("web-admin/uploads/")
    assert key.endswith("-My-Class-1-.png")
    assert sanitize_filename("") == "file"


def test_file_validators():
    assert validate_image_file(1024, "image/png") == (True, None)
    assert validate_image_file(1024, "image/gif")[0] is False
    assert validate_image_file(11 * 1024 * 1024, "image/jpeg")[0] is False
    assert validate_video_file(1024, "video/mp4") == (True, None)
    assert validate_video_file(501 * 1024 * 1024, "video/mp4")[0] is False


# ----- S3 CALLS -----

def test_upload_image(service, s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object", {}, {"Bucket": BUCKET, "Key": ANY, "Body": b"png-bytes", "ContentType": "image/png"}
        )
        result = service.upload_image("web-admin/uploads/classes/images/", "thumb.png", b"png-bytes", "image/png")
        stubber.assert_no_pending_responses()

    assert result["url"] == f"https://{BUCKET}.s3.us-east-1.amazonaws.com/{result['key']}"
    assert result["key"].endswith("-thumb.png")


def test_upload_rejects_wrong_type(service):
    with pytest.raises(ValidationError):
        service.upload_image("images/", "doc.pdf", b"%PDF", "application/pdf")


def test_upload_failure_is_external_error(service, s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(ExternalServiceError):
            service.upload("images/a.png", b"data", "image/png")


def test_delete_counts_failures(service, s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response("delete_object", {}, {"Bucket": BUCKET, "Key": "images/a.png"})
        stubber.add_client_error("delete_object", service_error_code="AccessDenied", http_status_code=403)
        result = service.delete([f"https://{BUCKET}.s3.us-east-1.amazonaws.com/images/a.png", "", "images/b.png"])

    assert (result.deleted_count, result.failed_count) == (1, 1)
    assert result.failed == ["images/b.png"]
    assert result.success is False


def test_presigned_upload(service):
    result = service.presigned_upload("videos/", "intro.mp4", "video/mp4", 1024)

    assert result["key"].startswith("videos/")
    assert result["final_url"].endswith(result["key"])
    assert "X-Amz-Signature" in result["presigned_url"]


def test_presigned_upload_rejects_large_video(service):
    with pytest.raises(ValidationError):
        service.presigned_upload("videos/", "intro.mp4", "video/mp4", 600 * 1024 * 1024)
