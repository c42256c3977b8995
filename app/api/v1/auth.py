"""
Authentication endpoints.

Follows Layer 1 and Layer 3 rules:
- Validate input with Pydantic schemas
- Return minimal information on failure
- ALWAYS use Pydantic models for request/response
- The tenant of an authenticated call comes from the token, never from the body
"""
from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from core.auth import auth_required, Authed
from core.db import get_db
from core.tenant import authed_tenant, resolve_tenant_id
from schemas.auth import (
    ChangePasswordIn,
    ForgotPasswordIn,
    LoginIn,
    LoginOut,
    MeOut,
    RegisterIn,
    ResetPasswordIn,
)
from schemas.base import ApiResponse
from services import auth_service

router = APIRouter(prefix="/api/Auth", tags=["auth"])


@router.post("/Login", response_model=LoginOut)
def login(body: LoginIn, db: Session = Depends(get_db)) -> dict:
    """
    Authenticate a user of a tenant and issue a JWT.

    Returns 401 with the same message whether the user is unknown or the
    password is wrong.
    """
    return auth_service.login(db, body.username, body.password, body.tenant_id)


@router.post("/CambioDeClave", response_model=ApiResponse)
def cambio_de_clave(
    body: ChangePasswordIn,
    tenant_id: str = Depends(authed_tenant),
    db: Session = Depends(get_db),
) -> dict:
    """Change the password of a user of the caller's tenant. Requires a JWT."""
    return auth_service.change_password(
        db, tenant_id, body.username, body.current_password, body.new_password
    )


@router.post("/OlvideMiClave", response_model=ApiResponse)
def olvide_mi_clave(body: ForgotPasswordIn, db: Session = Depends(get_db)) -> dict:
    """
    Request a password reset email (simulated through the log).

    Always succeeds, whether or not the account exists.
    """
    return auth_service.forgot_password(db, body.username_or_email)


@router.post("/RestablecerClave", response_model=ApiResponse)
def restablecer_clave(body: ResetPasswordIn, db: Session = Depends(get_db)) -> dict:
    """Set a new password using the token from OlvideMiClave."""
    return auth_service.reset_password(db, body.token, body.new_password)


@router.post("/Register", response_model=ApiResponse)
def register(body: RegisterIn, db: Session = Depends(get_db)) -> dict:
    """Register a new active user in the given tenant."""
    return auth_service.register(
        db, body.username, body.email, body.password, body.role, body.tenant_id
    )


@router.get("/Me", response_model=MeOut)
def me(auth: Authed = Depends(auth_required)) -> dict:
    """Identity and tenant of the current token."""
    return {
        "success": True,
        "user_id": auth.user_id,
        "username": auth.username,
        "tenant_id": resolve_tenant_id(auth),
        "role": auth.role,
    }
