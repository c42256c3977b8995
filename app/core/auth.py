"""
Authentication and JWT token management module.

Follows Layer 1 rules:
- Sign tokens with a private signing key from environment variables
- NEVER hardcode secrets or keys in the repository
- Include user id, username, role and tenantId in JWT claims
- Validate issuer, audience, lifetime and signature on every request
- Only accept tokens via secure headers (Authorization: Bearer <token>)
"""
from __future__ import annotations
import datetime
import uuid
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from core.config import settings
from core.errors import http_error, ErrorCode

ALGORITHM = "HS256"
TENANT_CLAIM = "tenantId"

_bearer = HTTPBearer(auto_error=False, description="JWT issued by POST /api/Auth/Login")


class Authed(BaseModel):
    """Authenticated user context with tenant and role information."""
    user_id: str
    username: str
    tenant_id: str | None = None
    role: str


def sign_jwt(user_id: str, username: str, email: str, role: str, tenant_id: str) -> str:
    """
    Sign a JWT token for a user of a tenant.

    Args:
        user_id: User identifier
        username: Login name, unique within the tenant
        email: User email
        role: User role (e.g. Admin, User)
        tenant_id: Tenant the user belongs to; carried in the "tenantId" claim

    Returns:
        Encoded JWT token string
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "email": email,
        "role": role,
        TENANT_CLAIM: tenant_id,
        "jti": uuid.uuid4().hex,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + datetime.timedelta(minutes=settings.JWT_EXP_MIN),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_jwt(token: str) -> Authed:
    """
    Validate a token and build the caller context from its claims.

    Raises:
        HTTPException: 401 if the token is expired, tampered or issued for someone else
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "iss", "aud", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise http_error(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message="Token has expired",
        )
    except jwt.InvalidTokenError:
        raise http_error(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message="Invalid or expired token",
        )

    tenant_id = payload.get(TENANT_CLAIM)
    return Authed(
        user_id=str(payload.get("sub", "")),
        username=str(payload.get("username", "")),
        tenant_id=str(tenant_id) if tenant_id else None,
        role=str(payload.get("role", "")),
    )


def auth_required(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Authed:
    """
    FastAPI dependency that validates the JWT from the Authorization header.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise http_error(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message="Missing bearer token",
        )
    return decode_jwt(credentials.credentials.strip())

