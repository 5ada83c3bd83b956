import os
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from pagefetch.fetch.errors import FetchTimeoutError, NetworkError
from pagefetch.fetch.fetcher import HttpFetcher
from pagefetch.main import app

EIGHTY_LINES = "\n".join(f"line-{i}" for i in range(1, 81))

@pytest.fixture
def client():
    """Test client with lifespan, so the overflow store exists"""
    with TestClient(app) as test_client:
        yield test_client

def fetcher_with(transport):
    """Stand-in for HttpFetcher in routes that answers from a MockTransport"""
    return lambda store: HttpFetcher(store=store, transport=transport)

class TestFetchEndpoint:
    """Integration tests for the /fetch endpoint"""

    def test_fetch_json(self, client, respond):
        transport = respond('{"hello":"world","nested":{"value":1}}', "application/json; charset=utf-8")
        with patch("pagefetch.api.routes.HttpFetcher", fetcher_with(transport)):
            response = client.post("/fetch", json={"url": "test.local/data"})

        assert response.status_code == 200
        data = response.json()
        assert data["requestUrl"] == "https://test.local/data"
        assert data["finalUrl"] == "https://test.local/data"
        assert data["status"] == 200
        assert data["contentType"] == "application/json"
        assert data["method"] == "json"
        assert data["content"].startswith('{\n  "hello": "world",\n  "nested": {')
        assert data["truncated"] is False
        assert "fullOutputPath" not in data
        assert "truncation" not in data

    def test_fetch_truncated_output_is_registered(self, client, respond):
        with patch("pagefetch.api.routes.HttpFetcher", fetcher_with(respond(EIGHTY_LINES))):
            response = client.post(
                "/fetch",
                json={"url": "http://test.local/large", "maxLines": 5, "maxBytes": 32}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["truncated"] is True
        assert data["truncation"]["totalLines"] == 80
        assert data["truncation"]["outputBytes"] <= 32
        assert os.path.exists(data["fullOutputPath"])

        overflow = client.get("/overflow").json()
        assert overflow["count"] == 1
        assert overflow["paths"] == [data["fullOutputPath"]]

    def test_upstream_error_status_is_data(self, client, respond):
        with patch("pagefetch.api.routes.HttpFetcher", fetcher_with(respond("Not Found", status_code=404))):
            response = client.post("/fetch", json={"url": "http://test.local/missing"})

        assert response.status_code == 200
        assert response.json()["status"] == 404
        assert response.json()["content"] == "Not Found"

    def test_invalid_scheme(self, client):
        response = client.post("/fetch", json={"url": "file:///etc/passwd"})

        assert response.status_code == 400
        assert "Only HTTP(S) URLs are supported" in response.json()["detail"]

    def test_empty_url(self, client):
        response = client.post("/fetch", json={"url": "  "})

        assert response.status_code == 400
        assert "must not be empty" in response.json()["detail"]

    def test_missing_url(self, client):
        response = client.post("/fetch", json={})

        assert response.status_code == 422

    def test_invalid_limits(self, client):
        response = client.post("/fetch", json={"url": "example.com", "maxBytes": 0})

        assert response.status_code == 422

    @patch.object(HttpFetcher, "fetch", new_callable=AsyncMock)
    def test_timeout(self, mock_fetch, client):
        mock_fetch.side_effect = FetchTimeoutError(0.05)

        response = client.post("/fetch", json={"url": "http://slow.local", "timeoutSeconds": 0.05})

        assert response.status_code == 504
        assert response.json()["detail"] == "Request timed out after 0.05s"

    @patch.object(HttpFetcher, "fetch", new_callable=AsyncMock)
    def test_network_error(self, mock_fetch, client):
        mock_fetch.side_effect = NetworkError("Fetch failed for http://down.local: ConnectError: refused")

        response = client.post("/fetch", json={"url": "http://down.local"})

        assert response.status_code == 502
        assert "ConnectError" in response.json()["detail"]

class TestOverflowEndpoints:
    """Integration tests for overflow file management"""

    def test_cleanup_removes_files(self, client, respond):
        with patch("pagefetch.api.routes.HttpFetcher", fetcher_with(respond(EIGHTY_LINES))):
            data = client.post(
                "/fetch",
                json={"url": "http://test.local/large", "maxLines": 5, "maxBytes": 32}
            ).json()

        response = client.delete("/overflow")
        assert response.status_code == 200
        assert response.json() == {"removed": 1}
        assert not os.path.exists(data["fullOutputPath"])

        # Second cleanup is a no-op
        assert client.delete("/overflow").json() == {"removed": 0}
        assert client.get("/overflow").json() == {"count": 0, "paths": []}

    def test_shutdown_cleans_up(self, respond):
        transport = respond(EIGHTY_LINES)
        with TestClient(app) as test_client:
            with patch("pagefetch.api.routes.HttpFetcher", fetcher_with(transport)):
                data = test_client.post(
                    "/fetch",
                    json={"url": "http://test.local/large", "maxLines": 5, "maxBytes": 32}
                ).json()
            assert os.path.exists(data["fullOutputPath"])

        assert not os.path.exists(data["fullOutputPath"])

class TestHealthEndpoints:
    """Test health and utility endpoints"""

    def test_health_endpoint(self, client):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self, client):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "endpoints" in data
