"""
Tenant resolution.

Follows Layer 4 rules:
- Never trust tenant information from the client body; always from JWT claims
- The resolved tenant id is passed explicitly to services and repositories
"""
from __future__ import annotations
from fastapi import Depends
from core.auth import Authed, auth_required
from core.config import settings


def resolve_tenant_id(auth: Authed | None) -> str:
    """
    Tenant of the current caller, from the "tenantId" claim.

    Anonymous callers and tokens without the claim fall back to
    settings.DEFAULT_TENANT. Never raises.
    """
    if auth is None or not auth.tenant_id:
        return settings.DEFAULT_TENANT
    return auth.tenant_id


def authed_tenant(auth: Authed = Depends(auth_required)) -> str:
    """FastAPI dependency for endpoints that require a JWT: the caller's tenant."""
    return resolve_tenant_id(auth)
