import logging

from mehendi.errors import MehendiError

logger = logging.getLogger(__name__)

# entity type -> (table, image column)
IMAGE_COLUMNS = {
    "category": ("categories", "image"),
    "product": ("images", "image_url"),
}


class UsageScanner:
    """Tells whether an image URL is still referenced by some other row."""

    def __init__(self, rows, assume_in_use_on_failure=True):
        self.rows = rows
        self.assume_in_use_on_failure = assume_in_use_on_failure

    def is_referenced(self, public_url, exclude=()):
        """``exclude`` is an iterable of ``(entity_type, id)`` pairs to ignore."""
        if not public_url:
            return False

        excluded = {(entity_type, str(entity_id)) for entity_type, entity_id in exclude}

        try:
            for entity_type, (table, column) in IMAGE_COLUMNS.items():
                for row in self.rows.select(table, order_by=None, **{column: public_url}):
                    if (entity_type, str(row["id"])) not in excluded:
                        return True
        except MehendiError as e:
            logger.warning(
                "Error checking image usage for %s: %s (assuming %s)",
                public_url, e.message, "in use" if self.assume_in_use_on_failure else "not in use",
            )
            return self.assume_in_use_on_failure

        return False
