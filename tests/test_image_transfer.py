import os

import pytest

from mehendi.backend.local_storage import LocalObjectStore
from mehendi.errors import StorageError, ValidationError
from mehendi.services.image_transfer import ImageTransfer
from mehendi.utils.storage_paths import parse_key


@pytest.fixture
def local_store(tmp_path):
    return LocalObjectStore(str(tmp_path), "http://localhost:5000/")


@pytest.fixture
def transfer(local_store):
    return ImageTransfer(local_store, "gallery")


def test_upload_writes_object_and_returns_public_url(transfer, local_store, make_upload):
    stored = transfer.upload(make_upload(filename="Mandala.PNG"), "product", 9)

    assert stored.key.startswith("mehendi/product/mehendi-product-9-")
    assert stored.url == f"http://localhost:5000/storage/v1/object/public/gallery/{stored.key}"
    assert os.path.exists(local_store.path_for("gallery", stored.key))


def test_upload_validates_before_writing(transfer, tmp_path, make_upload):
    with pytest.raises(ValidationError):
        transfer.upload(make_upload(content_type="image/gif"), "category", 1)
    assert not os.path.exists(tmp_path / "gallery")


def test_upload_never_overwrites(transfer, monkeypatch, make_upload):
    monkeypatch.setattr("mehendi.services.image_transfer.compute_key", lambda *a: "mehendi/category/fixed.png")
    transfer.upload(make_upload(), "category", 1)

    with pytest.raises(StorageError, match="File already exists"):
        transfer.upload(make_upload(), "category", 1)


def test_upload_surfaces_remote_message(objects, make_upload):
    objects.fail_on["upload"] = StorageError("new row violates row-level security policy")
    transfer = ImageTransfer(objects, "gallery")

    with pytest.raises(StorageError) as exc:
        transfer.upload(make_upload(), "product", 3)
    assert exc.value.message == "Storage upload failed: new row violates row-level security policy"


def test_remove_without_url_is_a_no_op(transfer):
    assert transfer.remove("").ok
    assert transfer.remove(None).ok


def test_remove_reports_unparsable_url(transfer):
    result = transfer.remove("ftp://elsewhere/image.png")
    assert not result.ok
    assert result.error.message == "Invalid image URL format"


def test_parsed_key_deletes_exactly_once(transfer, local_store, make_upload):
    stored = transfer.upload(make_upload(), "category", 4)
    assert parse_key(stored.url) == f"gallery/{stored.key}"

    assert transfer.remove(stored.url).ok
    assert not os.path.exists(local_store.path_for("gallery", stored.key))

    second = transfer.remove(stored.url)
    assert not second.ok
    assert "not found" in second.error.message
