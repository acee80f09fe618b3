from dataclasses import dataclass

from mehendi.errors import ValidationError

MAX_IMAGE_SIZE = 10 * 1024 * 1024
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self):
        return len(self.data)

    @classmethod
    def from_file_storage(cls, file):
        """Read a Werkzeug FileStorage; returns None when no file was sent."""
        if file is None or not file.filename:
            return None
        return cls(filename=file.filename, content_type=file.mimetype or "", data=file.read())


def validate_image(upload, max_size=MAX_IMAGE_SIZE):
    if upload is None or not upload.data:
        raise ValidationError("No file provided")

    if upload.size > max_size:
        raise ValidationError(
            f"File size ({upload.size / 1024 / 1024:.2f}MB) exceeds limit ({max_size // (1024 * 1024)}MB)"
        )

    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(f"File type {upload.content_type} not allowed. Use: JPEG, PNG, or WebP")
