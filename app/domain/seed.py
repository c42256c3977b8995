"""
Schema creation and demo data for two tenants.

Seeding is idempotent: rows are only inserted when the tenant has none.
"""
from __future__ import annotations
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from core.logger import get_logger
from core.security import hash_password
from domain.sqlalchemy_models import Base, Product, User

log = get_logger(__name__)

DEMO_USERS = [
    # (tenant_id, username, email, password, role)
    ("tenant-a", "admin", "admin@tenanta.com", "Admin123!", "Admin"),
    ("tenant-a", "user1", "user1@tenanta.com", "User123!", "User"),
    ("tenant-b", "admin", "admin@tenantb.com", "Admin123!", "Admin"),
    ("tenant-b", "user1", "user1@tenantb.com", "User123!", "User"),
]

DEMO_PRODUCTS = [
    # (tenant_id, name, description, price, stock)
    ("tenant-a", "Laptop HP", "Laptop HP Pavilion 15", Decimal("899.99"), 10),
    ("tenant-a", "Mouse Logitech", "Mouse inalámbrico Logitech MX", Decimal("49.99"), 50),
    ("tenant-b", "iPhone 15", "Apple iPhone 15 Pro Max", Decimal("1199.99"), 5),
    ("tenant-b", "AirPods Pro", "Apple AirPods Pro 2nd Gen", Decimal("249.99"), 20),
]


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_demo_data(db: Session) -> None:
    """Insert demo users and products for tenant-a and tenant-b."""
    seeded_tenants = set(db.scalars(select(User.tenant_id).distinct()).all())

    for tenant_id, username, email, password, role in DEMO_USERS:
        if tenant_id in seeded_tenants:
            continue
        db.add(User(
            tenant_id=tenant_id,
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
            is_active=True,
        ))

    stocked_tenants = set(db.scalars(select(Product.tenant_id).distinct()).all())
    for tenant_id, name, description, price, stock in DEMO_PRODUCTS:
        if tenant_id in stocked_tenants:
            continue
        db.add(Product(tenant_id=tenant_id, name=name, description=description, price=price, stock=stock))

    db.commit()
    log.info("Demo data ready", extra={"meta": {"tenants": sorted({row[0] for row in DEMO_USERS})}})
