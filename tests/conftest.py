"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite schema seeded with the two demo
tenants (tenant-a, tenant-b).
"""
from __future__ import annotations

import os
from typing import Iterator

# Must be set before any application module reads settings
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-1234567890"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.db import SessionLocal, engine
from domain.seed import create_schema, seed_demo_data
from domain.sqlalchemy_models import Base
from main import app


@pytest.fixture()
def db() -> Iterator[Session]:
    create_schema(engine)
    session = SessionLocal()
    seed_demo_data(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> TestClient:
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def login(client: TestClient):
    """Log in through the API and return the bearer headers."""

    def _login(username: str = "admin", password: str = "Admin123!", tenant_id: str = "tenant-a") -> dict:
        response = client.post(
            "/api/Auth/Login",
            json={"username": username, "password": password, "tenantId": tenant_id},
        )
        assert response.status_code == 200, response.text
        return bearer(response.json()["token"])

    return _login
