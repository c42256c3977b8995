"""Tests for tenant-scoped repositories."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.sqlalchemy_models import Product, User
from repositories.product_repo import ProductRepository
from repositories.user_repo import (
    UserRepository,
    find_by_email_any_tenant,
    find_by_id_any_tenant,
)


def _product_id(db: Session, tenant_id: str, name: str) -> int:
    return db.scalars(
        select(Product.id).where(Product.tenant_id == tenant_id, Product.name == name)
    ).one()


class TestProductRepository:
    def test_list_only_own_tenant(self, db: Session) -> None:
        names_a = [p.name for p in ProductRepository(db, "tenant-a").list()]
        names_b = [p.name for p in ProductRepository(db, "tenant-b").list()]
        assert names_a == ["Laptop HP", "Mouse Logitech"]
        assert names_b == ["iPhone 15", "AirPods Pro"]

    def test_get_other_tenant_is_none(self, db: Session) -> None:
        iphone_id = _product_id(db, "tenant-b", "iPhone 15")
        assert ProductRepository(db, "tenant-b").get(iphone_id) is not None
        assert ProductRepository(db, "tenant-a").get(iphone_id) is None

    def test_unknown_tenant_sees_nothing(self, db: Session) -> None:
        assert ProductRepository(db, "default").list() == []

    def test_add_overwrites_tenant(self, db: Session) -> None:
        forged = Product(name="Forged", description="", price=Decimal("1.00"), stock=1, tenant_id="tenant-b")
        saved = ProductRepository(db, "tenant-a").add(forged)
        assert saved.tenant_id == "tenant-a"
        assert saved.id is not None
        assert ProductRepository(db, "tenant-b").get(saved.id) is None

    def test_save_rejects_retagged_entity(self, db: Session) -> None:
        products = ProductRepository(db, "tenant-a")
        product = products.list()[0]
        product.tenant_id = "tenant-b"
        with pytest.raises(ValueError):
            products.save(product)
        db.rollback()

    def test_delete_rejects_foreign_entity(self, db: Session) -> None:
        foreign = ProductRepository(db, "tenant-b").list()[0]
        with pytest.raises(ValueError):
            ProductRepository(db, "tenant-a").delete(foreign)
        assert ProductRepository(db, "tenant-b").get(foreign.id) is not None

    def test_requires_tenant(self, db: Session) -> None:
        with pytest.raises(ValueError):
            ProductRepository(db, "")


class TestUserRepository:
    def test_same_username_per_tenant(self, db: Session) -> None:
        admin_a = UserRepository(db, "tenant-a").get_by_username("admin")
        admin_b = UserRepository(db, "tenant-b").get_by_username("admin")
        assert admin_a.email == "admin@tenanta.com"
        assert admin_b.email == "admin@tenantb.com"
        assert admin_a.id != admin_b.id

    def test_list_is_scoped(self, db: Session) -> None:
        users = UserRepository(db, "tenant-a").list()
        assert {u.tenant_id for u in users} == {"tenant-a"}
        assert len(users) == 2

    def test_add_uses_bound_tenant(self, db: Session) -> None:
        user = UserRepository(db, "tenant-c").add(
            User(username="new", email="new@tenantc.com", password_hash="x", role="User", tenant_id="tenant-a")
        )
        assert user.tenant_id == "tenant-c"
        assert UserRepository(db, "tenant-a").exists("new") is False

    def test_email_lookup_crosses_tenants(self, db: Session) -> None:
        user = find_by_email_any_tenant(db, "user1@tenantb.com")
        assert user is not None
        assert user.tenant_id == "tenant-b"
        assert find_by_email_any_tenant(db, "nobody@example.com") is None

    def test_id_lookup_crosses_tenants(self, db: Session) -> None:
        admin_b = UserRepository(db, "tenant-b").get_by_username("admin")
        assert find_by_id_any_tenant(db, admin_b.id).tenant_id == "tenant-b"
        assert find_by_id_any_tenant(db, 9999) is None
