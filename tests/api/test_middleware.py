"""Tests for API middleware."""

from fastapi.testclient import TestClient


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get("/health", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    def test_request_id_in_error_body(self, client: TestClient) -> None:
        response = client.get("/sections/nowhere", headers={"X-Request-ID": "req-42"})
        assert response.status_code == 404
        assert response.json()["request_id"] == "req-42"


class TestApiKeyMiddleware:
    """Tests for admin API key authentication middleware."""

    def test_reads_are_public(self, client: TestClient) -> None:
        """Read endpoints work without authentication."""
        assert client.get("/sections").status_code == 200
        assert client.get("/brands").status_code == 200
        assert client.get("/filters").status_code == 200

    def test_mutations_require_auth(self, client: TestClient) -> None:
        response = client.post("/sections", json={"name": "Helmets"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_auth_format_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/sections",
            json={"name": "Helmets"},
            headers={"Authorization": "InvalidFormat"},
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_invalid_api_key_rejected(self, client: TestClient) -> None:
        response = client.delete(
            "/categories/anything",
            headers={"Authorization": "Bearer invalid-key"},
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_API_KEY"

    def test_valid_api_key_accepted(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post("/sections", json={"name": "Helmets"}, headers=auth_headers)
        assert response.status_code == 201
