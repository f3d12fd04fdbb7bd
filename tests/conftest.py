import os
import pytest
import httpx

# 👉 Используем отдельную тестовую БД (файлик SQLite) и флаг TESTING
TEST_DSN = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["DATABASE_URL"] = TEST_DSN
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("CLIENT_URL", "http://localhost:3000")
os.environ.setdefault("SECRET_KEY", "test-secret")

from app.core.container import Container, get_container  # noqa: E402
from app.core.settings import get_settings  # noqa: E402
from app.infrastructure.media.uploader import UploadResult  # noqa: E402


class FakeUploader:
    """Запоминает вызовы; по умолчанию «загружает» успешно."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def uploads(self, file, public_id=None, overwrite=False, invalidate=False):
        self.calls.append({"file": file, "public_id": public_id,
                           "overwrite": overwrite, "invalidate": invalidate})
        if self.fail:
            return UploadResult(error="Invalid image file")
        return UploadResult(
            public_id=public_id,
            secure_url=f"https://res.cloudinary.com/demo/image/upload/{public_id}",
        )


class FakePublisher:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.messages = []

    def publish_direct_message(self, exchange_name, routing_key, message, log_message):
        if self.error is not None:
            raise self.error
        self.messages.append({"exchange": exchange_name, "routing_key": routing_key,
                              "message": message, "log_message": log_message})


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def container(uploader, publisher) -> Container:
    return Container(get_settings(), uploader=uploader, publisher=publisher)


@pytest.fixture
async def app(container):
    from app.main import app as real_app
    from app.infrastructure.db.init_db import init

    # чистая схема на каждый тест
    await init(drop_all=True)
    real_app.dependency_overrides[get_container] = lambda: container
    yield real_app
    real_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    # httpx с ASGITransport (без lifespan)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def signup_body() -> dict:
    return {
        "username": "alice",
        "email": "Alice@Example.com",
        "password": "qwerty",
        "country": "Thailand",
        "profilePicture": "data:image/png;base64,iVBORw0KGgo=",
    }
