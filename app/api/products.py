"""Product endpoints under /api/products (public, no role gate)."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from app.api.dependencies import get_product_repo, json_object_body
from app.dtos.products import CreateProductDTO, UpdateProductDTO
from app.models.errors import ValidationError
from app.models.product import Product
from app.repos.product_repo import ProductRepo
from app.use_cases.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetAllProductsUseCase,
    GetProductUseCase,
    UpdateProductUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

Repo = Annotated[ProductRepo, Depends(get_product_repo)]
JsonBody = Annotated[dict[str, Any], Depends(json_object_body)]


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: float
    stock: int
    createdAt: str
    updatedAt: str


def _out(product: Product) -> ProductOut:
    return ProductOut.model_validate(product.to_dict())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


@router.get("", response_model=list[ProductOut])
def list_products(repo: Repo) -> list[ProductOut]:
    return [_out(p) for p in GetAllProductsUseCase(repo).execute()]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, repo: Repo) -> ProductOut:
    product = GetProductUseCase(repo).execute(product_id)
    if product is None:
        raise _not_found()
    return _out(product)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: JsonBody, repo: Repo) -> ProductOut:
    dto = CreateProductDTO.from_dict(payload)
    try:
        product = CreateProductUseCase(repo).execute(dto)
    except ValidationError as e:
        logger.warning("Invalid product payload: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return _out(product)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: JsonBody, repo: Repo) -> ProductOut:
    dto = UpdateProductDTO.from_dict(payload)
    try:
        product = UpdateProductUseCase(repo).execute(product_id, dto)
    except ValidationError as e:
        logger.warning("Invalid update for product id=%s: %s", product_id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    if product is None:
        raise _not_found()
    return _out(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_product(product_id: int, repo: Repo) -> Response:
    if not DeleteProductUseCase(repo).execute(product_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
