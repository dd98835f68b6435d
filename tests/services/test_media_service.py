# tests/services/test_media_service.py
import boto3
import pytest
from botocore.stub import Stubber

from blog_api.core.config import settings
from blog_api.errors import UploadFailed
from blog_api.services.media_service import MediaService


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        endpoint_url="https://media.example.com",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_upload_image_returns_public_url(s3_client):
    service = MediaService(settings, s3_client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_response("put_object", {})
        url = service.upload_image(b"data", "my cat.png", "image/png")

    prefix = f"https://media.example.com/{settings.S3_BUCKET_NAME}/{settings.S3_UPLOAD_PREFIX}/"
    assert url.startswith(prefix)
    assert url.endswith("-my-cat.png")


def test_public_base_url_overrides_endpoint(s3_client):
    custom = settings.model_copy(update={"MEDIA_PUBLIC_BASE_URL": "https://cdn.example.com/"})
    service = MediaService(custom, s3_client=s3_client)
    assert service.public_url("blog/a.png") == "https://cdn.example.com/blog/a.png"


def test_object_key_is_sanitised(s3_client):
    service = MediaService(settings, s3_client=s3_client)
    key = service.object_key("../../etc/passwd")
    assert key.startswith(f"{settings.S3_UPLOAD_PREFIX}/")
    assert key.count("/") == 1
    assert key.endswith("-..-..-etc-passwd")


def test_upload_image_failure(s3_client):
    service = MediaService(settings, s3_client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(UploadFailed):
            service.upload_image(b"data", "cat.png", "image/png")
