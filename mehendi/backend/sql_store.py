import logging

from sqlalchemy.exc import SQLAlchemyError

from mehendi import db
from mehendi.errors import DatabaseError
from mehendi.models.category import Category
from mehendi.models.product import Product

logger = logging.getLogger(__name__)

TABLES = {
    "categories": Category,
    "images": Product,
}


class SqlRowStore:
    """Row store on the app's own database, used by the "local" backend."""

    def _model(self, table):
        try:
            return TABLES[table]
        except KeyError:
            raise DatabaseError(f"Unknown table: {table}") from None

    def select(self, table, order_by="created_at", desc=True, **filters):
        model = self._model(table)
        try:
            query = model.query.filter_by(**filters)
            if order_by:
                column = getattr(model, order_by)
                if desc:
                    query = query.order_by(column.desc(), model.id.desc())
                else:
                    query = query.order_by(column.asc(), model.id.asc())
            return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error fetching {table}: {e}") from e

    def get(self, table, row_id):
        model = self._model(table)
        try:
            row = db.session.get(model, row_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error fetching {table}: {e}") from e
        return row.to_dict() if row else None

    def insert(self, table, values):
        model = self._model(table)
        try:
            row = model(**values)
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise DatabaseError(f"Database error: {e}") from e
        return row.to_dict()

    def update(self, table, row_id, values):
        model = self._model(table)
        try:
            row = db.session.get(model, row_id)
            if row is None:
                return None
            for column, value in values.items():
                setattr(row, column, value)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise DatabaseError(f"Database error: {e}") from e
        return row.to_dict()

    def delete(self, table, **filters):
        if not filters:
            raise ValueError("delete() needs at least one filter")
        model = self._model(table)
        try:
            rows = model.query.filter_by(**filters).all()
            deleted = [row.to_dict() for row in rows]
            for row in rows:
                db.session.delete(row)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise DatabaseError(f"Database error: {e}") from e
        return deleted
