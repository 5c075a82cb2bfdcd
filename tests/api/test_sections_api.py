"""Tests for section API endpoints."""

from fastapi.testclient import TestClient


class TestCreateSection:
    """Tests for POST /sections."""

    def test_create_section(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/sections", json={"name": "Motorcycle Parts"}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Motorcycle Parts"
        assert data["section"] == "Motorcycle Parts"
        assert data["slug"] == "motorcycle-parts"
        assert data["categories"] == []

    def test_duplicate_slug_conflict(
        self, client: TestClient, auth_headers: dict[str, str], riding_gear: dict
    ) -> None:
        response = client.post(
            "/sections",
            json={"name": "Gear", "slug": "riding-gear"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "CONFLICT"
        assert data["details"][0]["field"] == "slug"

    def test_invalid_slug(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post(
            "/sections",
            json={"name": "Gear", "slug": "riding gear"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_missing_name(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/sections", json={}, headers=auth_headers)

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "name"


class TestReadSections:
    """Tests for GET /sections and GET /sections/{slug}."""

    def test_list_sections_with_categories(
        self, client: TestClient, auth_headers: dict[str, str], riding_gear: dict
    ) -> None:
        client.post(
            "/categories",
            json={
                "name": "Helmets",
                "section": "riding-gear",
                "types": [{"name": "Full Face"}, {"name": "Modular"}],
            },
            headers=auth_headers,
        )

        response = client.get("/sections")

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert [s["slug"] for s in sections] == ["riding-gear"]
        category = sections[0]["categories"][0]
        assert category["slug"] == "helmets"
        assert category["icon"] is None
        assert category["applicableTypes"] == [
            {"name": "Full Face", "slug": "full-face"},
            {"name": "Modular", "slug": "modular"},
        ]

    def test_get_section(self, client: TestClient, riding_gear: dict) -> None:
        response = client.get("/sections/riding-gear")

        assert response.status_code == 200
        assert response.json()["id"] == riding_gear["id"]

    def test_get_unknown_section(self, client: TestClient) -> None:
        response = client.get("/sections/nowhere")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "SECTION_NOT_FOUND"
        assert data["message"] == "Section not found: nowhere"
