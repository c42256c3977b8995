"""
Centralized configuration management.

Follows Layer 5 rules:
- All secrets (DB URLs, JWT keys) MUST come from environment variables
  or a secure secret store (never hardcoded)
- Centralize configuration in this module
- Do not spread os.getenv calls all over the codebase
- Do not log secrets or environment values
"""
from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Database ---
    DATABASE_URL: str | None = Field(default=None, description="Full SQLAlchemy URL; overrides the PG_* values")
    PG_HOST: str = Field(default="localhost", description="PostgreSQL host")
    PG_PORT: int = Field(default=5432, description="PostgreSQL port")
    PG_DB: str = Field(default="multitenant", description="PostgreSQL database name")
    PG_USER: str = Field(default="postgres", description="PostgreSQL user")
    PG_PASSWORD: str = Field(default="", description="PostgreSQL password")
    PG_SSLMODE: str = Field(default="prefer", description="PostgreSQL SSL mode (require/prefer/disable)")
    SEED_DEMO_DATA: bool = Field(default=True, description="Create tables and seed demo tenants on startup")

    # --- JWT ---
    JWT_SECRET: str = Field(..., description="JWT signing secret key")
    JWT_ISSUER: str = Field(default="MultiTenantApi", description="Expected token issuer")
    JWT_AUDIENCE: str = Field(default="MultiTenantApiClients", description="Expected token audience")
    JWT_EXP_MIN: int = Field(default=60, description="JWT expiration in minutes")

    # --- Accounts ---
    BCRYPT_ROUNDS: int = Field(default=12, description="bcrypt cost factor for new password hashes")
    MIN_PASSWORD_LENGTH: int = Field(default=6, description="Minimum length for new passwords")
    PASSWORD_RESET_EXP_MIN: int = Field(default=60, description="Password reset token lifetime in minutes")
    DEFAULT_TENANT: str = Field(default="default", description="Tenant used when the request carries no tenant claim")

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    LOG_FILE: str | None = Field(default=None, description="Optional path for a daily rotating log file")

    # --- CORS ---
    CORS_ORIGINS: str = Field(default="*", description="CORS allowed origins (comma-separated)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL, built from the PG_* values unless DATABASE_URL is set."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.PG_USER}:{self.PG_PASSWORD}"
            f"@{self.PG_HOST}:{self.PG_PORT}/{self.PG_DB}?sslmode={self.PG_SSLMODE}"
        )


settings = Settings()
