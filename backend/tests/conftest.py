import io
import os
import shutil
import sys
import tempfile

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Isolate tests from any local .env / database before settings are imported
_UPLOAD_DIR = tempfile.mkdtemp(prefix="refineai-uploads-")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = _UPLOAD_DIR
os.environ["GEMINI_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["ADMIN_PASSWORD_HASH"] = ""
os.environ["LLM_MAX_ATTEMPTS"] = "1"

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from config import settings
from core.auth import hash_password, login_throttle, tokens
from main import app
from storage.memory import MemoryStorage
from storage.sql import SqlStorage

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret-pass"


def make_image_bytes(fmt: str = "JPEG", size: tuple[int, int] = (640, 480), color=(200, 190, 180)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(scope="session", autouse=True)
def _cleanup_upload_dir():
    yield
    shutil.rmtree(_UPLOAD_DIR, ignore_errors=True)


@pytest.fixture
def storage():
    store = MemoryStorage()
    store.seed_defaults()
    return store


@pytest.fixture
def sql_storage(temp_sqlite_db):
    store = SqlStorage(f"sqlite:///{temp_sqlite_db}")
    store.seed_defaults()
    yield store
    store.close()


@pytest.fixture
def client(storage):
    with TestClient(app) as test_client:
        app.state.storage = storage
        yield test_client
    tokens.clear()
    login_throttle.reset()


@pytest.fixture
def admin_credentials(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_USERNAME", ADMIN_USER)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
    return ADMIN_USER, ADMIN_PASSWORD


@pytest.fixture
def admin_headers(client, admin_credentials):
    username, password = admin_credentials
    resp = client.post("/api/admin/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def jpeg_bytes():
    return make_image_bytes()


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    os.remove(path)
