import pytest

from mehendi.backend.sql_store import SqlRowStore
from mehendi.errors import DatabaseError


@pytest.fixture
def store(app):
    return SqlRowStore()


def test_insert_and_get(store):
    row = store.insert("categories", {"name": "Bridal", "image": None})

    assert row["id"] is not None
    assert row["created_at"]
    assert store.get("categories", row["id"])["name"] == "Bridal"
    assert store.get("categories", 999) is None


def test_select_newest_first_with_filters(store):
    bridal = store.insert("categories", {"name": "Bridal"})
    arabic = store.insert("categories", {"name": "Arabic"})
    for name in ("One", "Two"):
        store.insert("images", {"name": name, "category_id": bridal["id"]})
    store.insert("images", {"name": "Other", "category_id": arabic["id"]})

    names = [r["name"] for r in store.select("images", category_id=bridal["id"])]
    assert names == ["Two", "One"]
    assert [r["name"] for r in store.select("images", order_by="name", desc=False)] == ["One", "Other", "Two"]


def test_update_missing_row_returns_none(store):
    assert store.update("categories", 42, {"name": "Ghost"}) is None


def test_update(store):
    row = store.insert("categories", {"name": "Bridal"})
    updated = store.update("categories", row["id"], {"name": "Bridal Royal", "image": "http://x/y.png"})
    assert updated["name"] == "Bridal Royal"
    assert updated["image"] == "http://x/y.png"


def test_delete_returns_deleted_rows(store):
    category = store.insert("categories", {"name": "Bridal"})
    store.insert("images", {"name": "One", "category_id": category["id"]})
    store.insert("images", {"name": "Two", "category_id": category["id"]})

    deleted = store.delete("images", category_id=category["id"])
    assert sorted(r["name"] for r in deleted) == ["One", "Two"]
    assert store.select("images") == []
    assert store.delete("categories", id=999) == []


def test_delete_requires_a_filter(store):
    with pytest.raises(ValueError):
        store.delete("categories")


def test_unknown_table(store):
    with pytest.raises(DatabaseError, match="Unknown table"):
        store.select("users")
