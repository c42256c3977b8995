"""
Repository for password reset requests.

Reset requests are not tenant-scoped: they are looked up by their opaque token.
"""
from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from domain.sqlalchemy_models import PasswordResetRequest


class PasswordResetRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, request: PasswordResetRequest) -> PasswordResetRequest:
        self.db.add(request)
        self._commit()
        self.db.refresh(request)
        return request

    def get_by_token(self, token: str) -> Optional[PasswordResetRequest]:
        """Unused request with this token, or None. Expiry is checked by the caller."""
        return self.db.scalars(
            select(PasswordResetRequest).where(
                PasswordResetRequest.reset_token == token,
                PasswordResetRequest.is_used.is_(False),
            )
        ).first()

    def mark_used(self, request: PasswordResetRequest) -> None:
        request.is_used = True
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
