"""Create, update and delete categories and products together with their images.

Each operation is a straight sequence of backend calls. Validation and
conflict checks run before anything is uploaded; a failed row write
removes the image that was uploaded for it; storage cleanup failures on
the way are logged and never block the row mutation.

An update with a new image releases the old one only after the row has
been updated, so the row never points at a deleted object. Deletes release
images first and then remove the rows.
"""
import logging
import time
from dataclasses import dataclass

from mehendi.errors import ConflictError, MehendiError, NotFoundError, ValidationError
from mehendi.services.image_transfer import ImageTransfer
from mehendi.services.usage import UsageScanner
from mehendi.utils.file_rules import MAX_IMAGE_SIZE

logger = logging.getLogger(__name__)

CATEGORIES = "categories"
PRODUCTS = "images"


@dataclass(frozen=True)
class ProductDeletion:
    row: dict
    storage_cleaned: bool


@dataclass(frozen=True)
class CategoryDeletion:
    row: dict
    deleted_products: int
    storage_cleaned: bool


def parse_id(value, label):
    if value is None or value == "":
        raise ValidationError(f"{label} ID is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label.lower()} ID format") from None


def _require_name(name, label):
    name = (name or "").strip()
    if not name:
        raise ValidationError(f"{label} name is required")
    return name


def _temporary_id():
    return int(time.time() * 1000)


class CatalogManager:
    def __init__(self, backend, assume_in_use_on_failure=True, max_image_size=MAX_IMAGE_SIZE):
        self.rows = backend.rows
        self.images = ImageTransfer(backend.objects, backend.bucket, max_image_size)
        self.usage = UsageScanner(backend.rows, assume_in_use_on_failure)

    # Reads

    def list_categories(self):
        return self.rows.select(CATEGORIES)

    def list_products(self, category_id=None):
        if category_id is None:
            return self.rows.select(PRODUCTS)
        return self.rows.select(PRODUCTS, category_id=parse_id(category_id, "Category"))

    # Categories

    def add_category(self, name, upload=None):
        name = _require_name(name, "Category")
        logger.info("🏷️ Adding category: %s", name)

        if self.rows.select(CATEGORIES, order_by=None, name=name):
            raise ConflictError(f'Category "{name}" already exists')

        image_url = None
        if upload is not None:
            image_url = self._upload(upload, "category", _temporary_id())

        row = self._insert(CATEGORIES, {"name": name, "image": image_url}, image_url)
        logger.info("✅ Category added: %s (ID: %s)", row["name"], row["id"])
        return row

    def update_category(self, category_id, name, upload=None):
        category_id = parse_id(category_id, "Category")
        name = _require_name(name, "Category")
        logger.info("📝 Updating category %s: %s", category_id, name)

        current = self.rows.get(CATEGORIES, category_id)
        if current is None:
            raise NotFoundError("Category not found")

        taken = [row for row in self.rows.select(CATEGORIES, order_by=None, name=name) if row["id"] != category_id]
        if taken:
            raise ConflictError(f'Category name "{name}" already exists')

        row = self._update(CATEGORIES, "category", current, {"name": name}, "image", upload)
        logger.info("✅ Category updated: %s", row["name"])
        return row

    def delete_category(self, category_id):
        category_id = parse_id(category_id, "Category")
        logger.info("🗑️ Deleting category %s", category_id)

        products = self.rows.select(PRODUCTS, order_by=None, category_id=category_id)
        logger.info("📦 Found %d products in category %s", len(products), category_id)

        doomed = [("category", category_id)] + [("product", p["id"]) for p in products]
        released = set()
        storage_cleaned = True
        for product in products:
            if not self._release(product.get("image_url"), doomed, released):
                storage_cleaned = False

        deleted_products = self.rows.delete(PRODUCTS, category_id=category_id)

        deleted = self.rows.delete(CATEGORIES, id=category_id)
        if not deleted:
            raise NotFoundError(f"Category with ID {category_id} not found")
        category = deleted[0]

        if not self._release(category.get("image"), doomed, released):
            storage_cleaned = False

        logger.info(
            "✅ Category %s and %d products deleted%s",
            category["name"], len(deleted_products),
            "" if storage_cleaned else " (some images may remain in storage)",
        )
        return CategoryDeletion(row=category, deleted_products=len(deleted_products), storage_cleaned=storage_cleaned)

    # Products

    def add_product(self, name, category_id, upload=None):
        name = _require_name(name, "Product")
        category_id = parse_id(category_id, "Category")
        logger.info("📦 Adding product %s to category %s", name, category_id)

        if self.rows.get(CATEGORIES, category_id) is None:
            raise NotFoundError("Selected category does not exist")

        image_url = None
        if upload is not None:
            image_url = self._upload(upload, "product", _temporary_id())

        values = {"name": name, "category_id": category_id, "image_url": image_url}
        row = self._insert(PRODUCTS, values, image_url)
        logger.info("✅ Product added: %s (ID: %s)", row["name"], row["id"])
        return row

    def update_product(self, product_id, name, category_id, upload=None):
        product_id = parse_id(product_id, "Product")
        name = _require_name(name, "Product")
        category_id = parse_id(category_id, "Category")
        logger.info("📝 Updating product %s: %s", product_id, name)

        current = self.rows.get(PRODUCTS, product_id)
        if current is None:
            raise NotFoundError("Product not found")

        if self.rows.get(CATEGORIES, category_id) is None:
            raise NotFoundError("Selected category does not exist")

        values = {"name": name, "category_id": category_id}
        row = self._update(PRODUCTS, "product", current, values, "image_url", upload)
        logger.info("✅ Product updated: %s", row["name"])
        return row

    def delete_product(self, product_id):
        product_id = parse_id(product_id, "Product")
        logger.info("🗑️ Deleting product %s", product_id)

        current = self.rows.get(PRODUCTS, product_id)
        if current is None:
            raise NotFoundError(f"Product with ID {product_id} not found")

        storage_cleaned = self._release(current.get("image_url"), [("product", product_id)])
        if not storage_cleaned:
            logger.warning("⚠️ Storage cleanup failed, continuing with database delete")

        deleted = self.rows.delete(PRODUCTS, id=product_id)
        if not deleted:
            raise NotFoundError(f"Product with ID {product_id} not found")

        logger.info("✅ Product %s and its image removed", deleted[0].get("name") or product_id)
        return ProductDeletion(row=deleted[0], storage_cleaned=storage_cleaned)

    # Image lifecycle

    def _upload(self, upload, entity_type, entity_id):
        try:
            return self.images.upload(upload, entity_type, entity_id).url
        except MehendiError as e:
            raise type(e)(f"Image upload failed: {e.message}") from e

    def _insert(self, table, values, image_url):
        try:
            return self.rows.insert(table, values)
        except MehendiError:
            if image_url:
                self._discard(image_url, "uploaded for a failed insert")
            raise

    def _update(self, table, entity_type, current, values, image_column, upload):
        old_url = current.get(image_column)
        new_url = old_url
        if upload is not None:
            new_url = self._upload(upload, entity_type, current["id"])

        values = dict(values, **{image_column: new_url})
        try:
            row = self.rows.update(table, current["id"], values)
        except MehendiError:
            if new_url != old_url:
                self._discard(new_url, "uploaded for a failed update")
            raise
        if row is None:
            if new_url != old_url:
                self._discard(new_url, "uploaded for a vanished row")
            raise NotFoundError(f"{entity_type.capitalize()} not found")

        if old_url and new_url != old_url:
            logger.info("🗑️ Releasing old %s image", entity_type)
            self._release(old_url, [(entity_type, current["id"])])
        return row

    def _release(self, url, exclude, released=None):
        """Delete ``url`` unless a surviving row still uses it. False on cleanup failure."""
        if not url:
            return True
        if released is not None:
            if url in released:
                return True
            released.add(url)
        if self.usage.is_referenced(url, exclude=exclude):
            logger.info("Image still in use elsewhere, keeping %s", url)
            return True
        return self._discard(url, "no longer referenced")

    def _discard(self, url, reason):
        result = self.images.remove(url)
        if not result.ok:
            logger.warning("⚠️ Could not delete image %s (%s): %s", url, reason, result.error.message)
        return result.ok
