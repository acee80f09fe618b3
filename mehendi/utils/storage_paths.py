"""Object-storage keys for uploaded images.

Keys look like ``mehendi/<entity>/mehendi-<entity>-<id>-<ms>-<rand>.<ext>``
and public URLs like ``.../storage/v1/object/public/<bucket>/<key>``.
"""
import logging
import time
import uuid
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

KEY_PREFIX = "mehendi"
PUBLIC_MARKER = "public"


def compute_key(entity_type, entity_id, filename):
    timestamp = int(time.time() * 1000)
    suffix = uuid.uuid4().hex[:6]
    extension = filename.rsplit(".", 1)[-1].lower()
    unique_name = f"{KEY_PREFIX}-{entity_type}-{entity_id}-{timestamp}-{suffix}.{extension}"
    return f"{KEY_PREFIX}/{entity_type}/{unique_name}"


def parse_key(public_url):
    """Return ``<bucket>/<key>`` from a public URL, or None if there is none."""
    if not public_url or not isinstance(public_url, str):
        return None

    try:
        parts = urlsplit(public_url)
    except ValueError:
        logger.warning("Invalid image URL format: %s", public_url)
        return None

    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None

    segments = parts.path.split("/")
    if PUBLIC_MARKER not in segments:
        return None
    index = segments.index(PUBLIC_MARKER)
    rest = [unquote(s) for s in segments[index + 1:]]
    if not any(rest):
        return None
    return "/".join(rest)


def split_bucket(storage_path):
    """Split ``<bucket>/<key>`` into ``(bucket, key)``."""
    if not storage_path:
        return None
    bucket, _, key = storage_path.partition("/")
    if not bucket or not key:
        return None
    return bucket, key
