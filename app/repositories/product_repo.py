# app/repositories/product_repo.py
from domain.sqlalchemy_models import Product
from repositories.base import TenantScopedRepository


class ProductRepository(TenantScopedRepository[Product]):
    model = Product
