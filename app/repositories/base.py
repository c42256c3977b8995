"""
Tenant-scoped repository base.

Follows Layer 4 rules:
- All queries on tenant-owned tables MUST be tenant-scoped
- Data access MUST be routed through the repository layer
- No raw queries inside API routes

The tenant is a constructor argument, so every repository instance is bound
to exactly one tenant for its whole life (one request).
"""
from __future__ import annotations
from typing import Generic, Optional, Sequence, TypeVar
from sqlalchemy import Select, select
from sqlalchemy.orm import Session
from domain.sqlalchemy_models import TenantScoped

T = TypeVar("T", bound=TenantScoped)


class TenantScopedRepository(Generic[T]):
    model: type[T]

    def __init__(self, db: Session, tenant_id: str):
        if not tenant_id:
            raise ValueError("tenant_id is required for a tenant-scoped repository")
        self.db = db
        self.tenant_id = tenant_id

    def _select(self) -> Select:
        """Base query for this repository: rows of the bound tenant only."""
        return select(self.model).where(self.model.tenant_id == self.tenant_id)

    def get(self, entity_id: int) -> Optional[T]:
        """
        Fetch one row by primary key.

        Rows of other tenants are reported as missing (None), never as forbidden.
        """
        return self.db.scalars(self._select().where(self.model.id == entity_id)).first()

    def list(self) -> Sequence[T]:
        return self.db.scalars(self._select().order_by(self.model.id)).all()

    def add(self, entity: T) -> T:
        """Insert a row; its tenant_id is always replaced by the bound tenant."""
        entity.tenant_id = self.tenant_id
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        return entity

    def save(self, entity: T) -> T:
        """Persist changes to a row previously loaded through this repository."""
        if entity.tenant_id != self.tenant_id:
            raise ValueError("entity does not belong to this repository's tenant")
        self._commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        if entity.tenant_id != self.tenant_id:
            raise ValueError("entity does not belong to this repository's tenant")
        self.db.delete(entity)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
