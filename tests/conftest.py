# tests/conftest.py
import os
import shutil
import tempfile
from pathlib import Path

# Settings are read once at import time, so the environment must be ready
# before anything under app/ is imported.
_TMP = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "development"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")
os.environ["PUBLIC_DIR"] = str(_TMP / "public")
os.environ["CONTACT_EMAIL"] = "shop@example.com"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from app.core.auth import create_access_token
from app.core.config import get_settings
from app.core.passwords import hash_password
from app.database import engine
from app.main import app
from app.models.user import Admin
from app.repositories.admin_repo import AdminRepository

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def clean_state():
    """Fresh tables and an empty upload directory for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)

    upload_dir = Path(get_settings().UPLOAD_DIR)
    shutil.rmtree(upload_dir, ignore_errors=True)
    upload_dir.mkdir(parents=True, exist_ok=True)
    yield


@pytest.fixture
def upload_dir() -> Path:
    return Path(get_settings().UPLOAD_DIR)


@pytest.fixture
def public_dir() -> Path:
    path = Path(get_settings().PUBLIC_DIR)
    path.mkdir(parents=True, exist_ok=True)
    (path / "index.html").write_text("<html>home</html>")
    (path / "admin.html").write_text("<html>admin</html>")
    (path / "styles.css").write_text("body {}")
    return path


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def admin(session) -> Admin:
    return AdminRepository().create(
        session,
        Admin(
            name="Site Admin",
            email=ADMIN_EMAIL,
            password=hash_password(ADMIN_PASSWORD),
        ),
    )


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    token = create_access_token(admin.id, admin.email, "admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    token = create_access_token(7, "customer@example.com", "user")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_product(client, admin_headers):
    """Helper: create a product through the API and return its JSON."""

    def _create(name="Herbal bath powder", price="149.50", **fields):
        files = fields.pop("files", None)
        data = {"name": name, "price": price, **fields}
        resp = client.post("/api/products", data=data, files=files, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
