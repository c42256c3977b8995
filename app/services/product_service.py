"""
Service layer for product CRUD.

Follows Layer 4 rules:
- Data access MUST be routed through repository/service layers
- Keep clean separation: API → service → repository → DB
- Every call works inside the caller's tenant; a product id of another
  tenant is reported as not found, never as forbidden
"""
from __future__ import annotations
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence
from sqlalchemy.orm import Session
from core.errors import http_error, ErrorCode
from core.logger import get_logger
from domain.sqlalchemy_models import Product
from repositories.product_repo import ProductRepository

log = get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


def _not_found():
    return http_error(
        status_code=404,
        code=ErrorCode.NOT_FOUND,
        message=PRODUCT_NOT_FOUND,
    )


def list_products(db: Session, tenant_id: str) -> Sequence[Product]:
    log.info("Listing products", extra={"tenant_id": tenant_id})
    return ProductRepository(db, tenant_id).list()


def get_product(db: Session, tenant_id: str, product_id: int) -> Product:
    """
    Raises:
        HTTPException: 404 if the product does not exist in the tenant
    """
    product = ProductRepository(db, tenant_id).get(product_id)
    if product is None:
        raise _not_found()
    return product


def create_product(
    db: Session,
    tenant_id: str,
    name: str,
    description: str,
    price: Decimal,
    stock: int,
) -> Product:
    product = ProductRepository(db, tenant_id).add(Product(
        name=name,
        description=description or "",
        price=price,
        stock=stock,
    ))
    log.info("Product created", extra={"tenant_id": tenant_id, "meta": {"product_id": product.id, "name": name}})
    return product


def update_product(
    db: Session,
    tenant_id: str,
    product_id: int,
    name: str,
    description: str,
    price: Decimal,
    stock: int,
) -> dict:
    """
    Replace the editable fields of a product.

    Raises:
        HTTPException: 404 if the product does not exist in the tenant
    """
    products = ProductRepository(db, tenant_id)
    product = products.get(product_id)
    if product is None:
        log.warning("Update of missing product", extra={"tenant_id": tenant_id, "meta": {"product_id": product_id}})
        raise _not_found()

    product.name = name
    product.description = description or ""
    product.price = price
    product.stock = stock
    product.updated_at = datetime.now(timezone.utc)
    products.save(product)

    log.info("Product updated", extra={"tenant_id": tenant_id, "meta": {"product_id": product_id}})
    return {"success": True, "message": "Product updated successfully"}


def delete_product(db: Session, tenant_id: str, product_id: int) -> dict:
    """
    Raises:
        HTTPException: 404 if the product does not exist in the tenant
    """
    products = ProductRepository(db, tenant_id)
    product = products.get(product_id)
    if product is None:
        log.warning("Delete of missing product", extra={"tenant_id": tenant_id, "meta": {"product_id": product_id}})
        raise _not_found()

    products.delete(product)
    log.info("Product deleted", extra={"tenant_id": tenant_id, "meta": {"product_id": product_id}})
    return {"success": True, "message": "Product deleted successfully"}
