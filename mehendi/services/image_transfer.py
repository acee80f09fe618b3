import logging
from dataclasses import dataclass

from mehendi.errors import MehendiError, StorageError
from mehendi.result import Err, Ok
from mehendi.utils.file_rules import MAX_IMAGE_SIZE, validate_image
from mehendi.utils.storage_paths import compute_key, parse_key, split_bucket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredImage:
    url: str
    key: str


class ImageTransfer:
    """Moves images in and out of the bucket for categories and products."""

    def __init__(self, objects, bucket, max_size=MAX_IMAGE_SIZE):
        self.objects = objects
        self.bucket = bucket
        self.max_size = max_size

    def upload(self, upload, entity_type, entity_id):
        validate_image(upload, self.max_size)

        key = compute_key(entity_type, entity_id, upload.filename)
        logger.info(
            "📤 Uploading %s image %s as %s (%.2fKB, %s)",
            entity_type, upload.filename, key, upload.size / 1024, upload.content_type,
        )

        try:
            self.objects.upload(self.bucket, key, upload.data, upload.content_type)
        except StorageError as e:
            if "Duplicate" in e.message:
                raise StorageError("File already exists. Please try again.") from e
            raise StorageError(f"Storage upload failed: {e.message}") from e

        url = self.objects.public_url(self.bucket, key)
        if not url:
            raise StorageError("Failed to generate public URL for uploaded file")

        logger.info("✅ Image uploaded: %s", url)
        return StoredImage(url=url, key=key)

    def remove(self, public_url):
        """Delete the object behind a public URL; never raises."""
        if not public_url:
            return Ok(None)

        location = split_bucket(parse_key(public_url))
        if location is None:
            logger.warning("Could not extract storage path from URL: %s", public_url)
            return Err(StorageError("Invalid image URL format"))

        bucket, key = location
        logger.info("🗂️ Deleting image from storage: %s/%s", bucket, key)
        try:
            self.objects.remove(bucket, [key])
        except MehendiError as e:
            logger.error("❌ Storage delete error: %s", e.message)
            return Err(StorageError(f"Storage delete failed: {e.message}"))

        return Ok(None)
