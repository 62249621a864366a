"""
Tests for the menu item HTTP endpoints.
"""

from decimal import Decimal

from tests.conftest import make_auth_headers


CURRY = {
    "name": "Green Curry",
    "base_price": "12.50",
    "category": {"name": "Curry"},
    "customization_groups": [
        {
            "name": "Size",
            "required": True,
            "options": [{"name": "Small"}, {"name": "Large", "additional_price": "2.00"}],
        },
    ],
}


def _create(client, headers, store_id=1, body=CURRY):
    response = client.post(f"/api/stores/{store_id}/menu-items", json=body, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()


class TestHealthEndpoint:

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestCreateEndpoint:
    """POST /api/stores/{store_id}/menu-items"""

    def test_create(self, client, owner_headers):
        data = _create(client, owner_headers)

        assert data["name"] == "Green Curry"
        assert Decimal(data["base_price"]) == Decimal("12.50")
        assert data["category"]["name"] == "Curry"
        assert data["sort_order"] == 0
        options = data["customization_groups"][0]["customization_options"]
        assert [o["name"] for o in options] == ["Large", "Small"]

    def test_requires_token(self, client, seed_roles):
        response = client.post("/api/stores/1/menu-items", json=CURRY)
        assert response.status_code == 401

    def test_rejects_bad_token(self, client, seed_roles):
        response = client.post(
            "/api/stores/1/menu-items",
            json=CURRY,
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401

    def test_staff_gets_403(self, client, staff_headers):
        response = client.post("/api/stores/1/menu-items", json=CURRY, headers=staff_headers)
        assert response.status_code == 403

    def test_missing_category_is_400(self, client, owner_headers):
        body = {k: v for k, v in CURRY.items() if k != "category"}
        response = client.post("/api/stores/1/menu-items", json=body, headers=owner_headers)
        assert response.status_code == 400
        assert "Category" in response.json()["detail"]

    def test_price_below_minimum_is_422(self, client, owner_headers):
        body = {**CURRY, "base_price": "0.00"}
        response = client.post("/api/stores/1/menu-items", json=body, headers=owner_headers)
        assert response.status_code == 422

    def test_negative_option_price_is_422(self, client, owner_headers):
        body = {
            **CURRY,
            "customization_groups": [
                {"name": "Size", "options": [{"name": "Tiny", "additional_price": "-1"}]},
            ],
        }
        response = client.post("/api/stores/1/menu-items", json=body, headers=owner_headers)
        assert response.status_code == 422

    def test_foreign_category_id_is_404(self, client, owner_headers, outsider_headers):
        foreign = _create(client, outsider_headers, store_id=2)
        body = {**CURRY, "category": {"id": foreign["category_id"], "name": "Curry"}}

        response = client.post("/api/stores/1/menu-items", json=body, headers=owner_headers)

        assert response.status_code == 404


class TestReadEndpoints:
    """GET endpoints are public."""

    def test_list_and_get(self, client, owner_headers):
        created = _create(client, owner_headers)

        listed = client.get("/api/stores/1/menu-items")
        assert listed.status_code == 200
        assert [i["id"] for i in listed.json()] == [created["id"]]

        fetched = client.get(f"/api/menu-items/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Green Curry"

    def test_get_missing_is_404(self, client, seed_roles):
        response = client.get("/api/menu-items/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Menu item with ID 999 not found"


class TestUpdateEndpoint:
    """PATCH /api/stores/{store_id}/menu-items/{item_id}"""

    def test_partial_update_keeps_customizations(self, client, owner_headers):
        created = _create(client, owner_headers)

        response = client.patch(
            f"/api/stores/1/menu-items/{created['id']}",
            json={"name": "Jungle Curry"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Jungle Curry"
        assert len(data["customization_groups"]) == 1

    def test_empty_groups_clear_customizations(self, client, owner_headers):
        created = _create(client, owner_headers)

        response = client.patch(
            f"/api/stores/1/menu-items/{created['id']}",
            json={"customization_groups": []},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["customization_groups"] == []

    def test_other_store_is_403(self, client, owner_headers):
        created = _create(client, owner_headers)

        response = client.patch(
            f"/api/stores/2/menu-items/{created['id']}",
            json={"name": "Mine now"},
            headers=make_auth_headers(4),
        )

        assert response.status_code == 403

    def test_missing_item_is_404(self, client, owner_headers):
        response = client.patch(
            "/api/stores/1/menu-items/999",
            json={"name": "Ghost"},
            headers=owner_headers,
        )
        assert response.status_code == 404


class TestDeleteEndpoint:
    """DELETE /api/stores/{store_id}/menu-items/{item_id}"""

    def test_delete_twice(self, client, owner_headers):
        created = _create(client, owner_headers)
        url = f"/api/stores/1/menu-items/{created['id']}"

        first = client.delete(url, headers=owner_headers)
        second = client.delete(url, headers=owner_headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json() == second.json() == {"id": created["id"]}
        assert client.get(f"/api/menu-items/{created['id']}").status_code == 404

    def test_staff_cannot_delete(self, client, owner_headers, staff_headers):
        created = _create(client, owner_headers)

        response = client.delete(f"/api/stores/1/menu-items/{created['id']}", headers=staff_headers)

        assert response.status_code == 403
