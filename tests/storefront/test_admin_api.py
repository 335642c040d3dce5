"""Tests for the store administrator endpoints."""

from fastapi.testclient import TestClient

from storefront.main import app
from tests.conftest import make_token

client = TestClient(app)


def auth(user_id, **claims):
    return {"Authorization": f"Bearer {make_token(user_id, **claims)}"}


class TestStoreSetup:

    def test_claim_store(self):
        response = client.put(
            "/api/admin/store",
            json={"store_name": "  Kiln House "},
            headers=auth("admin-1", email="owner@kiln.example"),
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": "admin-1",
            "email": "owner@kiln.example",
            "store_name": "Kiln House",
        }
        assert client.get("/api/admin/store", headers=auth("admin-1")).json()["store_name"] == "Kiln House"

    def test_rename_own_store(self):
        client.put("/api/admin/store", json={"store_name": "Kiln House"}, headers=auth("admin-1"))
        response = client.put("/api/admin/store", json={"store_name": "Kiln & Co"}, headers=auth("admin-1"))
        assert response.json()["store_name"] == "Kiln & Co"

    def test_store_of_another_admin_conflicts(self):
        client.put("/api/admin/store", json={"store_name": "Kiln House"}, headers=auth("admin-1"))
        response = client.put("/api/admin/store", json={"store_name": "Kiln House"}, headers=auth("admin-2"))
        assert response.status_code == 409

    def test_blank_store_name_rejected(self):
        response = client.put("/api/admin/store", json={"store_name": "   "}, headers=auth("admin-1"))
        assert response.status_code == 422

    def test_requires_token(self):
        assert client.put("/api/admin/store", json={"store_name": "X"}).status_code == 401

    def test_non_admin_has_no_store(self):
        assert client.get("/api/admin/store", headers=auth("shopper-1")).status_code == 403
