from __future__ import annotations

from datetime import UTC, datetime

from app.models.errors import ValidationError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# products.stock is a 32-bit INTEGER column
MAX_STOCK = 2_147_483_647


def _now() -> datetime:
    return datetime.now(UTC)


def _check_name(name: str) -> str:
    if not name.strip():
        raise ValidationError("Product name cannot be empty")
    return name


def _check_price(price: float) -> float:
    if price < 0:
        raise ValidationError("Price cannot be negative")
    return float(price)


def _check_stock(stock: int) -> int:
    if stock < 0:
        raise ValidationError("Stock cannot be negative")
    if stock > MAX_STOCK:
        raise ValidationError(f"Stock cannot exceed {MAX_STOCK}")
    return int(stock)


class Product:
    """Catalog item.

    Every field is validated before anything is assigned, so a failed
    constructor or setter never leaves a half-updated object behind.
    Each setter refreshes ``updated_at``; ``created_at`` never changes.
    """

    def __init__(
        self,
        name: str,
        description: str,
        price: float,
        stock: int,
    ) -> None:
        name = _check_name(name)
        price = _check_price(price)
        stock = _check_stock(stock)

        now = _now()
        self._id: int | None = None
        self._name = name
        self._description = description
        self._price = price
        self._stock = stock
        self._created_at = now
        self._updated_at = now

    @classmethod
    def restore(
        cls,
        *,
        id: int,
        name: str,
        description: str,
        price: float,
        stock: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> Product:
        """Rebuild a stored product without touching its timestamps."""
        product = cls.__new__(cls)
        product._id = id
        product._name = name
        product._description = description
        product._price = float(price)
        product._stock = int(stock)
        product._created_at = created_at
        product._updated_at = updated_at
        return product

    @property
    def id(self) -> int | None:
        return self._id

    def assign_id(self, product_id: int) -> None:
        # Called by repositories on first save.
        if self._id is not None and self._id != product_id:
            raise ValueError(f"product already has id {self._id}")
        self._id = product_id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = _check_name(value)
        self._touch()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._description = value
        self._touch()

    @property
    def price(self) -> float:
        return self._price

    @price.setter
    def price(self, value: float) -> None:
        self._price = _check_price(value)
        self._touch()

    @property
    def stock(self) -> int:
        return self._stock

    @stock.setter
    def stock(self, value: int) -> None:
        self._stock = _check_stock(value)
        self._touch()

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = max(_now(), self._created_at)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "price": self._price,
            "stock": self._stock,
            "createdAt": self._created_at.strftime(TIMESTAMP_FORMAT),
            "updatedAt": self._updated_at.strftime(TIMESTAMP_FORMAT),
        }

    def __repr__(self) -> str:
        return f"Product(id={self._id!r}, name={self._name!r})"
