"""Tests for /api/Products: CRUD scoped by the token's tenantId claim."""

from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.sqlalchemy_models import Product


def _id_of(db: Session, name: str) -> int:
    return db.scalars(select(Product.id).where(Product.name == name)).one()


NEW_PRODUCT = {"name": "Monitor Dell", "description": "27 pulgadas", "price": 329.5, "stock": 7}


class TestAuthRequired:
    def test_all_routes_need_token(self, client: TestClient) -> None:
        assert client.get("/api/Products").status_code == 401
        assert client.get("/api/Products/1").status_code == 401
        assert client.post("/api/Products", json=NEW_PRODUCT).status_code == 401
        assert client.put("/api/Products/1", json=NEW_PRODUCT).status_code == 401
        assert client.delete("/api/Products/1").status_code == 401


class TestList:
    def test_only_own_tenant(self, client: TestClient, login) -> None:
        response = client.get("/api/Products", headers=login())
        assert response.status_code == 200
        products = response.json()
        assert [p["name"] for p in products] == ["Laptop HP", "Mouse Logitech"]
        assert {p["tenantId"] for p in products} == {"tenant-a"}

    def test_camel_case_fields(self, client: TestClient, login) -> None:
        product = client.get("/api/Products", headers=login("admin", "Admin123!", "tenant-b")).json()[0]
        assert set(product) == {"id", "name", "description", "price", "stock", "tenantId", "createdAt", "updatedAt"}
        assert product["price"] == 1199.99
        assert product["updatedAt"] is None


class TestGet:
    def test_own(self, client: TestClient, db: Session, login) -> None:
        response = client.get(f"/api/Products/{_id_of(db, 'Laptop HP')}", headers=login())
        assert response.status_code == 200
        assert response.json()["stock"] == 10

    def test_other_tenant_id_is_404(self, client: TestClient, db: Session, login) -> None:
        response = client.get(f"/api/Products/{_id_of(db, 'iPhone 15')}", headers=login())
        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["code"] == "not_found"


class TestCreate:
    def test_tagged_with_token_tenant(self, client: TestClient, login) -> None:
        headers_b = login("user1", "User123!", "tenant-b")
        response = client.post("/api/Products", json={**NEW_PRODUCT, "tenantId": "tenant-a"}, headers=headers_b)
        assert response.status_code == 201
        created = response.json()
        assert created["tenantId"] == "tenant-b"
        assert created["price"] == 329.5

        names_a = [p["name"] for p in client.get("/api/Products", headers=login()).json()]
        assert "Monitor Dell" not in names_a
        names_b = [p["name"] for p in client.get("/api/Products", headers=headers_b).json()]
        assert "Monitor Dell" in names_b

    def test_validation(self, client: TestClient, login) -> None:
        headers = login()
        assert client.post("/api/Products", json={**NEW_PRODUCT, "price": 0}, headers=headers).status_code == 400
        assert client.post("/api/Products", json={**NEW_PRODUCT, "stock": -1}, headers=headers).status_code == 400
        assert client.post("/api/Products", json={**NEW_PRODUCT, "name": ""}, headers=headers).status_code == 400

    def test_description_optional(self, client: TestClient, login) -> None:
        response = client.post("/api/Products", json={"name": "Cable", "price": 5}, headers=login())
        assert response.status_code == 201
        assert response.json()["description"] == ""
        assert response.json()["stock"] == 0


class TestUpdate:
    def test_own(self, client: TestClient, db: Session, login) -> None:
        mouse_id = _id_of(db, "Mouse Logitech")
        response = client.put(f"/api/Products/{mouse_id}", json=NEW_PRODUCT, headers=login())
        assert response.status_code == 200
        assert response.json()["success"] is True

        updated = client.get(f"/api/Products/{mouse_id}", headers=login()).json()
        assert updated["name"] == "Monitor Dell"
        assert updated["updatedAt"] is not None

    def test_other_tenant_is_404_and_untouched(self, client: TestClient, db: Session, login) -> None:
        iphone_id = _id_of(db, "iPhone 15")
        response = client.put(f"/api/Products/{iphone_id}", json=NEW_PRODUCT, headers=login())
        assert response.status_code == 404

        iphone = client.get(f"/api/Products/{iphone_id}", headers=login("admin", "Admin123!", "tenant-b")).json()
        assert iphone["name"] == "iPhone 15"


class TestDelete:
    def test_own(self, client: TestClient, db: Session, login) -> None:
        laptop_id = _id_of(db, "Laptop HP")
        headers = login()
        assert client.delete(f"/api/Products/{laptop_id}", headers=headers).status_code == 200
        assert client.get(f"/api/Products/{laptop_id}", headers=headers).status_code == 404

    def test_other_tenant_is_404_and_kept(self, client: TestClient, db: Session, login) -> None:
        airpods_id = _id_of(db, "AirPods Pro")
        assert client.delete(f"/api/Products/{airpods_id}", headers=login()).status_code == 404
        headers_b = login("admin", "Admin123!", "tenant-b")
        assert client.get(f"/api/Products/{airpods_id}", headers=headers_b).status_code == 200
