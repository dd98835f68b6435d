# tests/api/test_upload.py
import pytest
from httpx import AsyncClient
from fastapi import status

from blog_api.main import app
from blog_api.core.config import settings
from blog_api.errors import UploadFailed
from blog_api.services.media_service import get_media_service


class FakeMediaService:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []

    def upload_image(self, data: bytes, file_name: str, content_type: str) -> str:
        if self.fail:
            raise UploadFailed()
        self.uploads.append((data, file_name, content_type))
        return f"https://media.example.com/blog/{file_name}"


@pytest.fixture
def media_service():
    service = FakeMediaService()
    app.dependency_overrides[get_media_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_media_service, None)


@pytest.mark.asyncio
async def test_upload_image(client: AsyncClient, media_service: FakeMediaService):
    files = {"file": ("cat.png", b"\x89PNG fake bytes", "image/png")}
    response = await client.post("/api/upload", files=files)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"imageUrl": "https://media.example.com/blog/cat.png"}
    assert media_service.uploads == [(b"\x89PNG fake bytes", "cat.png", "image/png")]


@pytest.mark.asyncio
async def test_upload_without_file(client: AsyncClient, media_service: FakeMediaService):
    response = await client.post("/api/upload")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert media_service.uploads == []


@pytest.mark.asyncio
async def test_upload_rejects_non_images(client: AsyncClient, media_service: FakeMediaService):
    files = {"file": ("notes.txt", b"hello", "text/plain")}
    response = await client.post("/api/upload", files=files)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert media_service.uploads == []


@pytest.mark.asyncio
async def test_upload_rejects_empty_files(client: AsyncClient, media_service: FakeMediaService):
    files = {"file": ("empty.png", b"", "image/png")}
    response = await client.post("/api/upload", files=files)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_upload_failure_upstream(client: AsyncClient, media_service: FakeMediaService):
    media_service.fail = True
    files = {"file": ("cat.png", b"bytes", "image/png")}
    response = await client.post("/api/upload", files=files)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error_code"] == "upload_failed"


@pytest.mark.asyncio
async def test_upload_rejects_oversized_files(client: AsyncClient, media_service: FakeMediaService, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_MAX_UPLOAD_BYTES", 4)
    files = {"file": ("big.png", b"12345", "image/png")}
    response = await client.post("/api/upload", files=files)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error_code"] == "data_validation_error"
    assert media_service.uploads == []
