# blog_api/services/media_service.py
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from functools import lru_cache
import re
import uuid
import logging

from blog_api.core.config import Settings, settings
from blog_api.errors import UploadFailed

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class MediaService:
    """Uploads images to an S3-compatible media host and hands back their public URL."""

    def __init__(self, settings: Settings, s3_client=None):
        self.settings = settings
        self.s3_client = s3_client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION_NAME,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            config=Config(
                signature_version="s3v4",
                connect_timeout=settings.MEDIA_UPLOAD_TIMEOUT,
                read_timeout=settings.MEDIA_UPLOAD_TIMEOUT,
                retries={"max_attempts": 2, "mode": "standard"},
            ),
        )

    def object_key(self, file_name: str) -> str:
        safe_name = _UNSAFE_CHARS.sub("-", file_name or "image").strip("-") or "image"
        return f"{self.settings.S3_UPLOAD_PREFIX}/{uuid.uuid4()}-{safe_name}"

    def public_url(self, object_key: str) -> str:
        if self.settings.MEDIA_PUBLIC_BASE_URL:
            return f"{self.settings.MEDIA_PUBLIC_BASE_URL.rstrip('/')}/{object_key}"
        endpoint = self.s3_client.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{self.settings.S3_BUCKET_NAME}/{object_key}"

    def upload_image(self, data: bytes, file_name: str, content_type: str) -> str:
        """Blocking upload; run it in the threadpool from async code."""
        object_key = self.object_key(file_name)
        try:
            self.s3_client.put_object(
                Bucket=self.settings.S3_BUCKET_NAME,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception(f"Error uploading {object_key} to media host: {e}")
            raise UploadFailed()

        logger.info(f"Uploaded {object_key} ({len(data)} bytes)")
        return self.public_url(object_key)


@lru_cache
def get_media_service() -> MediaService:
    """FastAPI dependency; the boto3 client is created on first use."""
    return MediaService(settings)
