from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.dtos.coerce import as_float, as_int, as_str


@dataclass(frozen=True, slots=True)
class CreateProductDTO:
    name: str
    description: str
    price: float
    stock: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateProductDTO:
        return cls(
            name=as_str(data.get("name"), ""),
            description=as_str(data.get("description"), ""),
            price=as_float(data.get("price"), 0.0),
            stock=as_int(data.get("stock"), 0),
        )


@dataclass(frozen=True, slots=True)
class UpdateProductDTO:
    """Partial update. ``None`` means "leave unchanged"; ``""`` and ``0`` are values."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateProductDTO:
        return cls(
            name=as_str(data.get("name"), None),
            description=as_str(data.get("description"), None),
            price=as_float(data.get("price"), None),
            stock=as_int(data.get("stock"), None),
        )
