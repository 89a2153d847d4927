from __future__ import annotations

import copy
from typing import Protocol

from app.models.product import Product


class ProductRepo(Protocol):
    def save(self, product: Product) -> None: ...
    def get_by_id(self, product_id: int) -> Product | None: ...
    def list_all(self) -> list[Product]: ...
    def delete(self, product: Product) -> None: ...


class InMemoryProductRepo:
    """Dict-backed ProductRepo.

    Stores and hands out copies so a caller mutating an entity it fetched
    does not change stored state until it calls save().
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Product] = {}
        self._next_id = 1

    def save(self, product: Product) -> None:
        if product.id is None:
            product.assign_id(self._next_id)
        self._next_id = max(self._next_id, product.id + 1)  # type: ignore[operator]
        self._by_id[product.id] = copy.deepcopy(product)  # type: ignore[index]

    def get_by_id(self, product_id: int) -> Product | None:
        product = self._by_id.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._by_id.values()]

    def delete(self, product: Product) -> None:
        if product.id is not None:
            self._by_id.pop(product.id, None)

    def clear(self) -> None:
        self._by_id.clear()
        self._next_id = 1
