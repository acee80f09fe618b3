import pytest

from mehendi import create_app
from mehendi.backend.factory import Backend
from mehendi.services.catalog import CatalogManager
from mehendi.utils.file_rules import ImageUpload

from fakes import PNG_BYTES, MemoryObjectStore, MemoryRowStore


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "MEHENDI_BACKEND": "local",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "SNAPSHOT_FOLDER": str(tmp_path / "snapshot"),
        "PUBLIC_BASE_URL": "http://localhost",
        "ADMIN_EMAIL": "admin@mehendi.studio",
        "ADMIN_PASSWORD": "henna-secret",
    })
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    response = client.post("/admin/login", json={"email": "admin@mehendi.studio", "password": "henna-secret"})
    assert response.status_code == 200
    return client


@pytest.fixture
def rows():
    return MemoryRowStore()


@pytest.fixture
def objects():
    return MemoryObjectStore()


@pytest.fixture
def catalog(rows, objects):
    return CatalogManager(Backend(rows=rows, objects=objects, bucket="gallery"))


@pytest.fixture
def make_upload():
    def _make(filename="henna.png", content_type="image/png", size=None):
        data = PNG_BYTES if size is None else b"\x00" * size
        return ImageUpload(filename=filename, content_type=content_type, data=data)
    return _make

