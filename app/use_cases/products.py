"""Product use cases.

Each class wraps one business action around a ProductRepo. Absence is a
return value (None / False); invariant violations raise ValidationError
from the entity and are left to propagate.
"""

from __future__ import annotations

import logging

from app.dtos.products import CreateProductDTO, UpdateProductDTO
from app.models.product import Product
from app.repos.product_repo import ProductRepo

logger = logging.getLogger(__name__)


class CreateProductUseCase:
    def __init__(self, repository: ProductRepo):
        self.repository = repository

    def execute(self, dto: CreateProductDTO) -> Product:
        product = Product(dto.name, dto.description, dto.price, dto.stock)
        self.repository.save(product)
        logger.info("Created product id=%s name=%s", product.id, product.name)
        return product


class UpdateProductUseCase:
    def __init__(self, repository: ProductRepo):
        self.repository = repository

    def execute(self, product_id: int, dto: UpdateProductDTO) -> Product | None:
        product = self.repository.get_by_id(product_id)
        if product is None:
            return None

        if dto.name is not None:
            product.name = dto.name
        if dto.description is not None:
            product.description = dto.description
        if dto.price is not None:
            product.price = dto.price
        if dto.stock is not None:
            product.stock = dto.stock

        self.repository.save(product)
        logger.info("Updated product id=%s", product_id)
        return product


class DeleteProductUseCase:
    def __init__(self, repository: ProductRepo):
        self.repository = repository

    def execute(self, product_id: int) -> bool:
        product = self.repository.get_by_id(product_id)
        if product is None:
            return False
        self.repository.delete(product)
        logger.info("Deleted product id=%s", product_id)
        return True


class GetProductUseCase:
    def __init__(self, repository: ProductRepo):
        self.repository = repository

    def execute(self, product_id: int) -> Product | None:
        return self.repository.get_by_id(product_id)


class GetAllProductsUseCase:
    def __init__(self, repository: ProductRepo):
        self.repository = repository

    def execute(self) -> list[Product]:
        return self.repository.list_all()
