"""
Repository for user accounts.

A UserRepository is bound to one tenant like every tenant-scoped repository.
Login and registration bind it to the tenant named in the request, since the
caller has no token yet. The *_any_tenant lookups are the only reads that
cross tenants; they serve the password reset flow, where the tenant is unknown.
"""
from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from domain.sqlalchemy_models import User
from repositories.base import TenantScopedRepository


class UserRepository(TenantScopedRepository[User]):
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.scalars(self._select().where(User.username == username)).first()

    def exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None


def find_by_email_any_tenant(db: Session, email: str) -> Optional[User]:
    """First account with this email, whatever its tenant."""
    return db.scalars(select(User).where(User.email == email).order_by(User.id)).first()


def find_by_id_any_tenant(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)
