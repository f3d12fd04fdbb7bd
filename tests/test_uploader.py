import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from app.infrastructure.media.uploader import MediaUploader

pytestmark = pytest.mark.asyncio


@pytest.fixture
def media() -> MediaUploader:
    return MediaUploader(cloud_name="demo", api_key="key", api_secret="secret")


async def test_uploads_passes_options(monkeypatch, media):
    seen = {}

    def _upload(file, **options):
        seen.update(options, file=file)
        return {"public_id": options["public_id"], "secure_url": "https://cdn/x.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", _upload)

    result = await media.uploads("data:image/png;base64,AAAA", "abc-123", True, True)

    assert result.public_id == "abc-123"
    assert result.secure_url == "https://cdn/x.png"
    assert seen["file"] == "data:image/png;base64,AAAA"
    assert seen["overwrite"] is True and seen["invalidate"] is True
    assert seen["resource_type"] == "auto"


async def test_uploads_error_returns_result_without_id(monkeypatch, media):
    def _upload(file, **options):
        raise CloudinaryError("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", _upload)

    result = await media.uploads("garbage", "abc-123", True, True)

    assert result.public_id is None
    assert result.secure_url is None
    assert "Invalid image file" in result.error
