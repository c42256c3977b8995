"""
Authentication service: login, password change, password reset and registration.

Follows Layer 1 and Layer 6 rules:
- Validates credentials securely
- Returns minimal information on failure (no "user not found vs wrong password" distinction)
- Never reveals whether an email is registered (forgot password)
- Logs security events (login attempts, password changes, registrations)
- NEVER logs plaintext passwords or hashes
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.auth import sign_jwt
from core.config import settings
from core.errors import http_error, ErrorCode
from core.logger import get_logger, log_security_event
from core.security import MAX_PASSWORD_BYTES, generate_reset_token, hash_password, verify_password
from domain.sqlalchemy_models import PasswordResetRequest, User
from repositories.password_reset_repo import PasswordResetRepository
from repositories.user_repo import (
    UserRepository,
    find_by_email_any_tenant,
    find_by_id_any_tenant,
)

log = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_DISABLED = "Account is disabled"
RESET_REQUESTED = "If the account exists, password reset instructions have been sent."
INVALID_RESET_TOKEN = "The reset token is invalid or has expired"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _check_password(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise http_error(
            status_code=400,
            code=ErrorCode.BAD_REQUEST,
            message=f"The password must be at least {settings.MIN_PASSWORD_LENGTH} characters long",
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise http_error(
            status_code=400,
            code=ErrorCode.BAD_REQUEST,
            message=f"The password must not be longer than {MAX_PASSWORD_BYTES} bytes",
        )


def login(db: Session, username: str, password: str, tenant_id: str) -> dict:
    """
    Authenticate a user of a tenant and issue a JWT.

    The lookup is bound to the tenant named in the request, not to the
    caller's ambient tenant: nobody has a token yet at login time.

    Args:
        db: Database session
        username: Username within the tenant
        password: Plaintext password (compared against the bcrypt hash)
        tenant_id: Tenant named by the client

    Returns:
        Dict with success, token and message

    Raises:
        HTTPException: 401 for invalid credentials or a disabled account
    """
    user = UserRepository(db, tenant_id).get_by_username(username)

    if user is None or not verify_password(password, user.password_hash):
        log_security_event(
            action="login",
            result="failure",
            user_id=str(user.id) if user else None,
            tenant_id=tenant_id,
            meta={"reason": "invalid_credentials", "username": username},
            level="warning",
        )
        raise http_error(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message=INVALID_CREDENTIALS,
            extra={"token": ""},
        )

    if not user.is_active:
        log_security_event(
            action="login",
            result="failure",
            user_id=str(user.id),
            tenant_id=tenant_id,
            meta={"reason": "user_disabled", "username": username},
            level="warning",
        )
        raise http_error(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message=ACCOUNT_DISABLED,
            extra={"token": ""},
        )

    token = sign_jwt(str(user.id), user.username, user.email, user.role, user.tenant_id)

    log_security_event(
        action="login",
        result="success",
        user_id=str(user.id),
        tenant_id=user.tenant_id,
        meta={"role": user.role},
    )

    return {"success": True, "token": token, "message": "Login successful"}


def change_password(
    db: Session,
    tenant_id: str,
    username: str,
    current_password: str,
    new_password: str,
) -> dict:
    """
    Change a user's password after checking the current one.

    Args:
        db: Database session
        tenant_id: Tenant resolved from the caller's token, never from the body
        username: Account to update
        current_password: Must match the stored hash
        new_password: Replacement, at least MIN_PASSWORD_LENGTH characters

    Raises:
        HTTPException: 404 if the user is not in the caller's tenant,
            400 if the current password is wrong or the new one out of bounds
    """
    users = UserRepository(db, tenant_id)
    user = users.get_by_username(username)

    if user is None:
        log_security_event(
            action="change_password",
            result="failure",
            tenant_id=tenant_id,
            meta={"reason": "user_not_found", "username": username},
            level="warning",
        )
        raise http_error(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            message="User not found",
        )

    if not verify_password(current_password, user.password_hash):
        log_security_event(
            action="change_password",
            result="failure",
            user_id=str(user.id),
            tenant_id=tenant_id,
            meta={"reason": "invalid_current_password"},
            level="warning",
        )
        raise http_error(
            status_code=400,
            code=ErrorCode.BAD_REQUEST,
            message="The current password is incorrect",
        )

    _check_password(new_password)

    user.password_hash = hash_password(new_password)
    user.updated_at = datetime.now(timezone.utc)
    users.save(user)

    log_security_event(
        action="change_password",
        result="success",
        user_id=str(user.id),
        tenant_id=tenant_id,
    )
    return {"success": True, "message": "Password updated successfully"}


def forgot_password(db: Session, username_or_email: str) -> dict:
    """
    Start a password reset.

    Always answers with the same generic success message so callers cannot
    probe which emails are registered. When the email matches an account, a
    reset request valid for PASSWORD_RESET_EXP_MIN minutes is stored and the
    simulated email is written to the log.
    """
    user = find_by_email_any_tenant(db, username_or_email)

    if user is None:
        log.warning("Password reset requested for unknown email", extra={"action": "forgot_password", "result": "ignored"})
        return {"success": True, "message": RESET_REQUESTED}

    now = datetime.now(timezone.utc)
    reset = PasswordResetRepository(db).create(PasswordResetRequest(
        user_id=user.id,
        username=user.username,
        email=user.email,
        reset_token=generate_reset_token(),
        requested_at=now,
        expires_at=now + timedelta(minutes=settings.PASSWORD_RESET_EXP_MIN),
    ))

    # No mail integration: the log is the delivery channel
    log.info(
        "[SIMULATED EMAIL] Password reset email sent",
        extra={
            "action": "forgot_password",
            "result": "sent",
            "user_id": str(user.id),
            "tenant_id": user.tenant_id,
            "meta": {
                "email": user.email,
                "username": user.username,
                "reset_token": reset.reset_token,
                "expires_at": reset.expires_at.isoformat(),
            },
        },
    )
    return {"success": True, "message": RESET_REQUESTED}


def reset_password(db: Session, token: str, new_password: str) -> dict:
    """
    Finish a password reset started by forgot_password.

    Raises:
        HTTPException: 400 if the token is unknown, used or expired, or the new password is out of bounds
    """
    resets = PasswordResetRepository(db)
    reset = resets.get_by_token(token)

    if reset is None or _as_utc(reset.expires_at) <= datetime.now(timezone.utc):
        log_security_event(
            action="reset_password",
            result="failure",
            meta={"reason": "invalid_or_expired_token"},
            level="warning",
        )
        raise http_error(
            status_code=400,
            code=ErrorCode.BAD_REQUEST,
            message=INVALID_RESET_TOKEN,
        )

    _check_password(new_password)

    user = find_by_id_any_tenant(db, reset.user_id)
    if user is None or user.email != reset.email:
        raise http_error(
            status_code=400,
            code=ErrorCode.BAD_REQUEST,
            message=INVALID_RESET_TOKEN,
        )

    user.password_hash = hash_password(new_password)
    user.updated_at = datetime.now(timezone.utc)
    UserRepository(db, user.tenant_id).save(user)
    resets.mark_used(reset)

    log_security_event(
        action="reset_password",
        result="success",
        user_id=str(user.id),
        tenant_id=user.tenant_id,
    )
    return {"success": True, "message": "Password has been reset successfully"}


def register(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: str | None,
    tenant_id: str,
) -> dict:
    """
    Create an active user in a tenant.

    Registration is what establishes the user's tenant, so the repository
    is bound to the tenant named in the request.

    Raises:
        HTTPException: 409 if the username already exists in that tenant,
            400 if the password is too short or too long for bcrypt
    """
    users = UserRepository(db, tenant_id)

    if users.exists(username):
        log_security_event(
            action="register",
            result="failure",
            tenant_id=tenant_id,
            meta={"reason": "duplicate_username", "username": username},
            level="warning",
        )
        raise http_error(
            status_code=409,
            code=ErrorCode.CONFLICT,
            message="The username already exists in this tenant",
        )

    _check_password(password)

    try:
        user = users.add(User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role or "User",
            is_active=True,
        ))
    except IntegrityError:
        # Concurrent registration of the same username won the unique index
        raise http_error(
            status_code=409,
            code=ErrorCode.CONFLICT,
            message="The username already exists in this tenant",
        )

    log_security_event(
        action="register",
        result="success",
        user_id=str(user.id),
        tenant_id=tenant_id,
        meta={"role": user.role},
    )
    return {"success": True, "message": "User registered successfully"}
