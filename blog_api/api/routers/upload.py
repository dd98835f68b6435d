# blog_api/api/routers/upload.py
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from typing import Optional

from blog_api.core.config import settings
from blog_api.errors import DataValidationError
from blog_api.schemas.media import UploadResponse
from blog_api.services.media_service import MediaService, get_media_service

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_image(
    file: Optional[UploadFile] = File(default=None),
    media_service: MediaService = Depends(get_media_service),
):
    """
    Forward an image to the media host and return its public URL.
    Upload before creating or updating the post that references it.
    """
    if file is None or not file.filename:
        raise DataValidationError(message="No file was uploaded.")

    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise DataValidationError(message="Only image files can be uploaded.")

    data = await file.read(settings.MEDIA_MAX_UPLOAD_BYTES + 1)
    if not data:
        raise DataValidationError(message="The uploaded file is empty.")
    if len(data) > settings.MEDIA_MAX_UPLOAD_BYTES:
        raise DataValidationError(message="The uploaded file is too large.")

    image_url = await run_in_threadpool(media_service.upload_image, data, file.filename, content_type)
    return UploadResponse(imageUrl=image_url)
