"""Integration tests for the ``{message, code}`` error envelope."""

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_malformed_json_returns_400(self, api_client):
        response = api_client.post(
            "/products", data="{", content_type="application/json"
        )

        assert response.status_code == 400
        data = response.json()
        assert set(data) == {"message", "code"}
        assert data["code"] == 400
        assert "JSON parse error" in data["message"]

    def test_non_object_body_returns_400(self, api_client):
        response = api_client.post("/products", [1, 2], format="json")

        assert response.status_code == 400
        assert response.json() == {
            "message": "Request body must be a JSON object.",
            "code": 400,
        }

    def test_validation_error_names_the_field(self, api_client):
        response = api_client.post(
            "/products", {"name": "Widget", "price": "0"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["message"] == "price: Price must be greater than zero."

    def test_unsupported_media_type(self, api_client):
        response = api_client.post(
            "/products", data="name=x", content_type="application/x-www-form-urlencoded"
        )

        assert response.status_code == 415
        assert response.json()["code"] == 415

    def test_unknown_route_returns_json_404(self, client):
        response = client.get("/no/such/route")

        assert response.status_code == 404
        assert response.json() == {"message": "Resource not found.", "code": 404}

    def test_method_not_allowed(self, api_client):
        response = api_client.delete("/orders")

        assert response.status_code == 405
        assert response.json()["code"] == 405

    def test_unexpected_error_returns_500(self, api_client, container, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(container.product_service, "list_products", explode)

        response = api_client.get("/products")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error.", "code": 500}
