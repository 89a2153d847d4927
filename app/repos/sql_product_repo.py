"""SQLAlchemy implementation of ProductRepo."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.tables import ProductRow
from app.models.product import Product


class SqlProductRepo:
    """Satisfies the ProductRepo Protocol using a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, product: Product) -> None:
        row = None
        if product.id is not None:
            row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)

        row.name = product.name
        row.description = product.description
        row.price = product.price
        row.stock = product.stock
        row.created_at = product.created_at
        row.updated_at = product.updated_at
        self._session.flush()

        if product.id is None:
            product.assign_id(row.id)

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        if row is None:
            return None
        return _row_to_product(row)

    def list_all(self) -> list[Product]:
        stmt = select(ProductRow).order_by(ProductRow.id)
        return [_row_to_product(row) for row in self._session.scalars(stmt)]

    def delete(self, product: Product) -> None:
        if product.id is None:
            return
        row = self._session.get(ProductRow, product.id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _row_to_product(row: ProductRow) -> Product:
    return Product.restore(
        id=row.id,
        name=row.name,
        description=row.description or "",
        price=row.price,
        stock=row.stock,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )
