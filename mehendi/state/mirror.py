"""Admin state owner.

Holds the categories, products and contact inquiries the admin panel and
public pages show, keeps them mirrored to a snapshot on disk, and drives
every lifecycle operation through an optimistic stage/confirm/rollback.

Categories and products come from the backend on ``refresh()``; until the
backend answers (or when it cannot) the snapshot is what is served.
Contacts only ever live here.

Delete failures:

* product: the optimistic removal is rolled back and the error returned;
  a product that is already gone remotely stays removed.
* category: the cascade is not atomic, so the removal is rolled back and
  the mirror is then re-read from the backend.
"""
import logging
import threading
import time
import uuid
from contextlib import contextmanager
from functools import partial

from mehendi.content import demo_contacts
from mehendi.errors import MehendiError, NotFoundError, OperationInProgressError
from mehendi.result import Err, Ok
from mehendi.schemas.contact import parse_contact
from mehendi.services.permissions import validate_admin_permissions
from mehendi.state.entities import Category, ContactSubmission, Product
from mehendi.state.optimistic import OptimisticList
from mehendi.state.snapshot import CATEGORIES_KEY, CONTACTS_KEY, LOGIN_KEY, PRODUCTS_KEY

logger = logging.getLogger(__name__)


def _temporary_id():
    return str(int(time.time() * 1000))


def _contact_id():
    # Inquiries keep their local id; the suffix separates same-millisecond submissions
    return f"{_temporary_id()}-{uuid.uuid4().hex[:6]}"


class AdminState:
    def __init__(self, catalog, snapshots, admin_user=None):
        self.catalog = catalog
        self.snapshots = snapshots
        self.admin_user = admin_user

        self.categories = OptimisticList(
            snapshots.read_entities(CATEGORIES_KEY, Category, []),
            on_change=partial(snapshots.write_entities, CATEGORIES_KEY),
        )
        self.products = OptimisticList(
            snapshots.read_entities(PRODUCTS_KEY, Product, []),
            on_change=partial(snapshots.write_entities, PRODUCTS_KEY),
        )
        self.contacts = OptimisticList(
            snapshots.read_entities(CONTACTS_KEY, ContactSubmission, demo_contacts()),
            on_change=partial(snapshots.write_entities, CONTACTS_KEY),
        )
        snapshots.write_entities(CONTACTS_KEY, self.contacts.items)

        self._logged_in = bool(snapshots.read(LOGIN_KEY, False))
        self._in_flight = set()
        self._guard = threading.Lock()

    # Session

    @property
    def is_logged_in(self):
        return self._logged_in

    def _set_logged_in(self, value):
        self._logged_in = value
        self.snapshots.write(LOGIN_KEY, value)

    def login(self, email, password):
        user = self.admin_user
        if user is None or (email or "").strip().lower() != user.email.lower():
            return False
        if not user.check_password(password or ""):
            return False
        self._set_logged_in(True)
        return True

    def logout(self):
        # Data stays in the snapshot, only the login flag is cleared
        self._set_logged_in(False)

    # Loading

    def refresh(self):
        try:
            categories = [Category.from_row(row) for row in self.catalog.list_categories()]
            products = [Product.from_row(row) for row in self.catalog.list_products()]
        except MehendiError as e:
            logger.warning("❌ Failed to load from backend, using snapshot: %s", e.message)
            return Err(e)

        self.categories.replace(categories)
        self.products.replace(products)
        logger.info("✅ Loaded %d categories and %d products", len(categories), len(products))
        return Ok(None)

    def products_in(self, category_id):
        category_id = str(category_id)
        return self.products.find(lambda p: p.category_id == category_id)

    def stats(self):
        return {
            "categories": len(self.categories),
            "products": len(self.products),
            "contacts": len(self.contacts),
        }

    # Categories

    def add_category(self, name, upload=None):
        def op():
            placeholder = Category(id=_temporary_id(), name=(name or "").strip(), image="")
            change = self.categories.stage_insert(placeholder)
            try:
                row = self.catalog.add_category(name, upload)
            except MehendiError:
                self.categories.rollback(change)
                raise
            category = Category.from_row(row)
            self.categories.confirm(change, category)
            return category

        return self._run(("category", (name or "").strip()), op)

    def update_category(self, category_id, name, upload=None):
        def op():
            row = self.catalog.update_category(category_id, name, upload)
            return self.categories.upsert(Category.from_row(row))

        return self._run(("category", str(category_id)), op)

    def delete_category(self, category_id):
        cid = str(category_id)

        def op():
            validate_admin_permissions()
            category_change = self.categories.stage_removal(lambda c: c.id == cid)
            product_change = self.products.stage_removal(lambda p: p.category_id == cid)
            try:
                deletion = self.catalog.delete_category(category_id)
            except MehendiError:
                self.categories.rollback(category_change)
                self.products.rollback(product_change)
                self.refresh()
                raise
            self.categories.confirm(category_change)
            self.products.confirm(product_change)
            logger.info("📊 Deleted %d related products", deletion.deleted_products)
            return deletion

        return self._run(("category", cid), op)

    # Products

    def add_product(self, name, category_id, upload=None):
        def op():
            placeholder = Product(
                id=_temporary_id(),
                name=(name or "").strip(),
                category_id=str(category_id or ""),
                image="",
            )
            change = self.products.stage_insert(placeholder)
            try:
                row = self.catalog.add_product(name, category_id, upload)
            except MehendiError:
                self.products.rollback(change)
                raise
            product = Product.from_row(row)
            self.products.confirm(change, product)
            return product

        return self._run(("product", f"new:{category_id}:{(name or '').strip()}"), op)

    def update_product(self, product_id, name, category_id, upload=None):
        def op():
            row = self.catalog.update_product(product_id, name, category_id, upload)
            return self.products.upsert(Product.from_row(row))

        return self._run(("product", str(product_id)), op)

    def delete_product(self, product_id):
        pid = str(product_id)

        def op():
            validate_admin_permissions()
            change = self.products.stage_removal(lambda p: p.id == pid)
            try:
                deletion = self.catalog.delete_product(product_id)
            except NotFoundError as e:
                self.products.confirm(change)
                logger.warning("Product %s was already gone: %s", pid, e.message)
                raise
            except MehendiError:
                self.products.rollback(change)
                raise
            self.products.confirm(change)
            logger.info("🗂️ Storage cleanup: %s", "ok" if deletion.storage_cleaned else "failed but continued")
            return deletion

        return self._run(("product", pid), op)

    # Contacts

    def add_contact(self, data):
        def op():
            form = parse_contact(data)
            contact = ContactSubmission(
                id=_contact_id(),
                name=form.name,
                email=str(form.email),
                phone=form.phone,
                message=form.message,
            )
            return self.contacts.append(contact)

        return self._run(None, op)

    def delete_contact(self, contact_id):
        cid = str(contact_id)

        def op():
            change = self.contacts.stage_removal(lambda c: c.id == cid)
            if not change.entities:
                self.contacts.rollback(change)
                raise NotFoundError(f"Inquiry with ID {cid} not found")
            self.contacts.confirm(change)
            return change.entities[0]

        return self._run(None, op)

    # Plumbing

    @contextmanager
    def _exclusive(self, target):
        if target is None:
            yield
            return
        with self._guard:
            if target in self._in_flight:
                raise OperationInProgressError(
                    f"Another change to {target[0]} {target[1]} is still in progress"
                )
            self._in_flight.add(target)
        try:
            yield
        finally:
            with self._guard:
                self._in_flight.discard(target)

    def _run(self, target, op):
        try:
            with self._exclusive(target):
                return Ok(op())
        except MehendiError as e:
            logger.error("❌ %s", e.message)
            return Err(e)
