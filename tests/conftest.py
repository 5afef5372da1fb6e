"""Shared fixtures: isolated directories, fresh tables, signed-in clients."""

import os
import tempfile
from contextlib import ExitStack
from io import BytesIO

# Setup environment for testing (must happen before photoshare is imported)
_tmp = tempfile.mkdtemp()
os.environ["PHOTOSHARE_DATA_DIR"] = os.path.join(_tmp, "data")
os.environ["PHOTOSHARE_UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["PHOTOSHARE_DB_PATH"] = os.path.join(_tmp, "data", "test.db")
os.environ.pop("PHOTOSHARE_DATABASE_URL", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image as PILImage  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from photoshare.database import engine  # noqa: E402
from photoshare.main import app  # noqa: E402
from photoshare.models.user import User  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def make_user(session):
    """Insert a user row directly (no HTTP)."""
    def _make(username: str) -> User:
        user = User(username=username, password_hash="not-a-real-hash")
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make


@pytest.fixture
def anon_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_client():
    """Register a user over HTTP and return (client, user_json) with its session cookie."""
    with ExitStack() as stack:
        def _make(username: str, password: str = "secret123"):
            client = stack.enter_context(TestClient(app))
            r = client.post("/api/register", json={"username": username, "password": password})
            assert r.status_code == 201, r.text
            return client, r.json()
        yield _make


def png_bytes(color: str = "red") -> bytes:
    buf = BytesIO()
    PILImage.new("RGB", (4, 4), color).save(buf, "PNG")
    return buf.getvalue()


@pytest.fixture
def upload():
    """POST /api/images with a small PNG; extra form fields pass through."""
    def _upload(client, description: str = "", **fields):
        data = {"description": description, **fields}
        return client.post(
            "/api/images",
            files={"image": ("photo.png", png_bytes(), "image/png")},
            data=data,
        )
    return _upload
