"""
Pydantic schemas for authentication endpoints.

Follows Layer 3 rules:
- Never expose password hashes or internal fields
- Required strings must be non-empty
"""
from __future__ import annotations
from typing import Optional
from pydantic import EmailStr, Field
from schemas.base import ApiModel, ApiResponse


class LoginIn(ApiModel):
    """Request schema for user login."""
    username: str = Field(..., min_length=1, max_length=100, description="Username within the tenant")
    password: str = Field(..., min_length=1, description="User password")
    tenant_id: str = Field(..., min_length=1, max_length=100, description="Tenant the user belongs to")


class LoginOut(ApiResponse):
    """Response schema for login; token is empty on failure."""
    token: str = ""


class ChangePasswordIn(ApiModel):
    """Request schema for CambioDeClave. The tenant comes from the token."""
    username: str = Field(..., min_length=1, max_length=100)
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72, description="6 to 72 characters")


class ForgotPasswordIn(ApiModel):
    """Request schema for OlvideMiClave."""
    username_or_email: str = Field(..., min_length=1, max_length=200)


class ResetPasswordIn(ApiModel):
    """Request schema for RestablecerClave: token from the reset email plus the new password."""
    token: str = Field(..., min_length=1, max_length=100)
    new_password: str = Field(..., min_length=6, max_length=72, description="6 to 72 characters")


class RegisterIn(ApiModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=200)
    password: str = Field(..., min_length=6, max_length=72, description="6 to 72 characters")
    role: Optional[str] = Field(default="User", max_length=50, description="Defaults to User when missing or null")
    tenant_id: str = Field(..., min_length=1, max_length=100)


class MeOut(ApiResponse):
    """Response schema for /Me."""
    user_id: str
    username: str
    tenant_id: str
    role: str
