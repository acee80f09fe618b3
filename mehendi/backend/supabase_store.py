"""Row and object stores on a hosted Supabase project."""
import logging

from supabase import create_client

from mehendi.errors import DatabaseError, StorageError

logger = logging.getLogger(__name__)


def _message(exc):
    return getattr(exc, "message", None) or str(exc)


def create_supabase_client(url, key):
    # Server-side admin client, no session handling
    return create_client(url, key)


class SupabaseRowStore:
    def __init__(self, client):
        self.client = client

    def _execute(self, query, context):
        try:
            response = query.execute()
        except Exception as exc:
            logger.error("❌ %s: %s", context, _message(exc))
            raise DatabaseError(f"{context}: {_message(exc)}") from exc
        return response.data or []

    def select(self, table, order_by="created_at", desc=True, **filters):
        query = self.client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=desc)
        return self._execute(query, f"Error fetching {table}")

    def get(self, table, row_id):
        query = self.client.table(table).select("*").eq("id", row_id).limit(1)
        rows = self._execute(query, f"Error fetching {table}")
        return rows[0] if rows else None

    def insert(self, table, values):
        rows = self._execute(self.client.table(table).insert(values), "Database error")
        if not rows:
            raise DatabaseError(f"Database error: insert into {table} returned no row")
        return rows[0]

    def update(self, table, row_id, values):
        query = self.client.table(table).update(values).eq("id", row_id)
        rows = self._execute(query, "Database error")
        return rows[0] if rows else None

    def delete(self, table, **filters):
        if not filters:
            raise ValueError("delete() needs at least one filter")
        query = self.client.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, value)
        return self._execute(query, f"Error deleting from {table}")


class SupabaseObjectStore:
    def __init__(self, client):
        self.client = client

    def upload(self, bucket, key, data, content_type):
        options = {
            "content-type": content_type,
            "cache-control": "3600",
            "upsert": "false",
        }
        try:
            self.client.storage.from_(bucket).upload(key, data, options)
        except Exception as exc:
            raise StorageError(_message(exc)) from exc

    def public_url(self, bucket, key):
        try:
            url = self.client.storage.from_(bucket).get_public_url(key)
        except Exception as exc:
            raise StorageError(_message(exc)) from exc
        return url.rstrip("?")

    def remove(self, bucket, keys):
        try:
            self.client.storage.from_(bucket).remove(list(keys))
        except Exception as exc:
            raise StorageError(_message(exc)) from exc
