import json
import logging
import os

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "mehendi_categories"
PRODUCTS_KEY = "mehendi_products"
CONTACTS_KEY = "mehendi_contacts"
LOGIN_KEY = "mehendi_is_logged_in"


class SnapshotStore:
    """JSON files, one per key, holding the last known admin state."""

    def __init__(self, folder):
        self.folder = folder

    def _path(self, key):
        return os.path.join(self.folder, f"{key}.json")

    def read(self, key, default):
        path = self._path(key)
        if not os.path.exists(path):
            return default
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Error reading snapshot %s: %s", key, e)
            return default

    def write(self, key, value):
        path = self._path(key)
        try:
            os.makedirs(self.folder, exist_ok=True)
            tmp_path = f"{path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            logger.warning("Error saving snapshot %s: %s", key, e)

    def read_entities(self, key, entity_cls, default):
        data = self.read(key, None)
        if data is None:
            return list(default)
        try:
            return [entity_cls.from_dict(item) for item in data]
        except (TypeError, KeyError, ValueError) as e:
            logger.warning("Discarding malformed snapshot %s: %s", key, e)
            return list(default)

    def write_entities(self, key, entities):
        self.write(key, [entity.to_dict() for entity in entities])
