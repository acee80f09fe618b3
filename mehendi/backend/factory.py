import logging
from dataclasses import dataclass
from typing import Any

from mehendi.errors import ConfigurationError

logger = logging.getLogger(__name__)

NOT_CONFIGURED = (
    "Supabase not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY "
    "(or SUPABASE_SERVICE_ROLE_KEY)."
)


@dataclass
class Backend:
    rows: Any
    objects: Any
    bucket: str
    configured: bool = True


class UnconfiguredStore:
    """Stands in for both stores when credentials are missing."""

    def _fail(self, *args, **kwargs):
        raise ConfigurationError(NOT_CONFIGURED)

    select = get = insert = update = delete = _fail
    upload = public_url = remove = _fail


def create_backend(config):
    bucket = config.get("STORAGE_BUCKET", "gallery")
    kind = (config.get("MEHENDI_BACKEND") or "local").lower()

    if kind == "supabase":
        url = config.get("SUPABASE_URL")
        key = config.get("SUPABASE_SERVICE_ROLE_KEY") or config.get("SUPABASE_ANON_KEY")
        if not url or not key:
            logger.warning("⚠️ %s", NOT_CONFIGURED)
            store = UnconfiguredStore()
            return Backend(rows=store, objects=store, bucket=bucket, configured=False)

        from mehendi.backend.supabase_store import (
            SupabaseObjectStore,
            SupabaseRowStore,
            create_supabase_client,
        )

        client = create_supabase_client(url, key)
        logger.info("✅ Supabase backend at %s", url)
        return Backend(rows=SupabaseRowStore(client), objects=SupabaseObjectStore(client), bucket=bucket)

    if kind != "local":
        raise ConfigurationError(f"Unknown MEHENDI_BACKEND: {kind}")

    from mehendi.backend.local_storage import LocalObjectStore
    from mehendi.backend.sql_store import SqlRowStore

    objects = LocalObjectStore(config["UPLOAD_FOLDER"], config["PUBLIC_BASE_URL"])
    return Backend(rows=SqlRowStore(), objects=objects, bucket=bucket)
