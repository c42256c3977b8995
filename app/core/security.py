"""
Password hashing and reset-token utilities.

Follows Layer 1 rules:
- Always use a strong hashing algorithm (bcrypt)
- NEVER log plaintext passwords or hashes
"""
from __future__ import annotations
import secrets
import bcrypt
from core.config import settings

# bcrypt only reads the first 72 bytes; bcrypt>=5 rejects longer input
MAX_PASSWORD_BYTES = 72


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password using bcrypt with a fresh salt.

    Args:
        plain: Plaintext password

    Returns:
        Hashed password string
    """
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode()


def verify_password(plain: str, hashed: str | None) -> bool:
    """
    Verify a plaintext password against a stored hash.

    bcrypt.checkpw compares digests in constant time.

    Args:
        plain: Plaintext password to verify
        hashed: Stored bcrypt hash (may be empty for seeded or broken rows)

    Returns:
        True if password matches, False otherwise
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Malformed hash ("Invalid salt")
        return False


def generate_reset_token() -> str:
    """Opaque, URL-safe password reset token (32 hex chars)."""
    return secrets.token_hex(16)
