# app/api/v1/products.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from core.db import get_db
from core.tenant import authed_tenant
from schemas.base import ApiResponse
from schemas.products import ProductIn, ProductOut
from services import product_service

router = APIRouter(prefix="/api/Products", tags=["products"])


@router.get("", response_model=list[ProductOut])
def products(tenant_id: str = Depends(authed_tenant), db: Session = Depends(get_db)):
    return product_service.list_products(db, tenant_id)


@router.get("/{product_id}", response_model=ProductOut)
def product_get(product_id: int, tenant_id: str = Depends(authed_tenant), db: Session = Depends(get_db)):
    return product_service.get_product(db, tenant_id, product_id)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def product_create(p: ProductIn, tenant_id: str = Depends(authed_tenant), db: Session = Depends(get_db)):
    return product_service.create_product(db, tenant_id, p.name, p.description, p.price, p.stock)


@router.put("/{product_id}", response_model=ApiResponse)
def product_update(
    product_id: int,
    p: ProductIn,
    tenant_id: str = Depends(authed_tenant),
    db: Session = Depends(get_db),
):
    return product_service.update_product(db, tenant_id, product_id, p.name, p.description, p.price, p.stock)


@router.delete("/{product_id}", response_model=ApiResponse)
def product_delete(product_id: int, tenant_id: str = Depends(authed_tenant), db: Session = Depends(get_db)):
    return product_service.delete_product(db, tenant_id, product_id)
