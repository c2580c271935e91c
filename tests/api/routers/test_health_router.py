"""Tests for health and root endpoints."""


class TestHealth:
    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["status"] == "ok"
        assert data["env"] == "test"
        assert data["db"] == {"status": "healthy", "city_count": 2, "category_count": 8}

    def test_health_degraded_when_database_fails(self, client, mock_reference_repo):
        mock_reference_repo.count_cities.side_effect = ConnectionError("db down")

        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["status"] == "degraded"
        assert data["db"]["status"] == "unhealthy"


class TestRoot:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["reports"] == "/reports"

    def test_unknown_route_returns_json_404(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_request_id_header_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
