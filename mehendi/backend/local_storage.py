import logging
import os

from werkzeug.utils import safe_join

from mehendi.errors import StorageError

logger = logging.getLogger(__name__)


class LocalObjectStore:
    """Filesystem bucket store that hands out Supabase-shaped public URLs."""

    def __init__(self, root, base_url):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def path_for(self, bucket, key):
        path = safe_join(self.root, bucket, key)
        if path is None:
            raise StorageError(f"Invalid storage key: {bucket}/{key}")
        return path

    def upload(self, bucket, key, data, content_type):
        path = self.path_for(bucket, key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            # "x" never replaces an existing object
            with open(path, "xb") as f:
                f.write(data)
        except FileExistsError:
            raise StorageError("The resource already exists (Duplicate)") from None
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.debug("Stored %s/%s (%s, %d bytes)", bucket, key, content_type, len(data))

    def public_url(self, bucket, key):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{key}"

    def remove(self, bucket, keys):
        for key in keys:
            path = self.path_for(bucket, key)
            if not os.path.exists(path):
                raise StorageError(f"Object not found: {bucket}/{key}")
            try:
                os.remove(path)
            except OSError as e:
                raise StorageError(str(e)) from e
