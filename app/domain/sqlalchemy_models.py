"""
SQLAlchemy models for the multi-tenant API.

Users and products carry a tenant_id and are only ever read through the
tenant-scoped repositories. Password reset requests are global: they are
created before a tenant is known for the caller.
"""
from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import (
    Column, ForeignKey, String, Boolean, Integer, Numeric, TIMESTAMP, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TenantScoped:
    """Mixin for entities isolated per tenant."""
    tenant_id = Column(String(100), nullable=False, index=True)


class User(TenantScoped, Base):
    """
    User model representing the accounts of one tenant.

    The same username may exist in several tenants; (username, tenant_id) is unique.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(50), nullable=False, default="User")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("username", "tenant_id", name="uq_users_username_tenant"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, tenant_id={self.tenant_id})>"


class Product(TenantScoped, Base):
    """Catalog item; each tenant only sees its own products."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    price = Column(Numeric(18, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name}, tenant_id={self.tenant_id})>"


class PasswordResetRequest(Base):
    """Pending or consumed password reset, addressed by its opaque token."""
    __tablename__ = "password_reset_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # usernames and emails repeat across tenants; the id names the account
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    username = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False)
    reset_token = Column(String(100), nullable=False, unique=True, index=True)
    requested_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(TIMESTAMP(timezone=True), nullable=False)
    is_used = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<PasswordResetRequest(id={self.id}, username={self.username}, is_used={self.is_used})>"
