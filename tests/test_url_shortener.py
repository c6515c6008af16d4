from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from linkhub_app.schemas.url import ShortenRequest
from linkhub_app.services.url_service import URLService


def shorten(client, **body):
    response = client.post("/shorten", json=body)
    assert response.status_code == 200, response.text
    return response.json()


class TestURLShortener:
    """Test the public shortening API"""

    def test_create_short_url(self, client: TestClient):
        response = client.post("/shorten", json={"originalUrl": "https://example.com"})
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "URL shortened successfully"
        assert len(data["shortCode"]) == 6
        assert data["shortUrl"].endswith("/" + data["shortCode"])
        assert data["originalUrl"] == "https://example.com"
        assert data["expiresAt"] is None

    def test_redirect_then_stats(self, client: TestClient):
        """End-to-end: shorten, follow, and see the click counted"""
        code = shorten(client, originalUrl="https://example.com")["shortCode"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com"

        stats = client.get(f"/{code}/stats").json()
        assert stats["shortCode"] == code
        assert stats["originalUrl"] == "https://example.com"
        assert stats["clickCount"] == 1
        assert stats["isActive"] is True

    def test_redirect_records_click_details(self, client: TestClient, store):
        code = shorten(client, originalUrl="https://example.com")["shortCode"]

        client.get(
            f"/{code}",
            headers={"User-Agent": "pytest-agent", "Referer": "https://twitter.com"},
            follow_redirects=False
        )

        [record] = store.click_log.records_for(code)
        assert record.user_agent == "pytest-agent"
        assert record.referrer == "https://twitter.com"
        assert record.country == "Vietnam"

    def test_shorten_twice_is_idempotent(self, client: TestClient):
        first = shorten(client, originalUrl="https://example.com", ownerId=5)
        second = shorten(client, originalUrl="https://example.com", ownerId=5)

        assert second["shortCode"] == first["shortCode"]
        assert second["success"] is True
        assert second["message"] == "URL already shortened"

    def test_custom_alias(self, client: TestClient):
        data = shorten(client, originalUrl="https://example.com", customAlias="my-link")
        assert data["shortCode"] == "my-link"

        response = client.get("/my-link", follow_redirects=False)
        assert response.headers["location"] == "https://example.com"

    def test_alias_conflict(self, client: TestClient, store):
        shorten(client, originalUrl="https://example.com", customAlias="taken")

        response = client.post("/shorten", json={"originalUrl": "https://other.com", "customAlias": "taken"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "Custom alias already exists"
        assert len(store) == 1

    def test_invalid_url(self, client: TestClient, store):
        response = client.post("/shorten", json={"originalUrl": "not-a-valid-url"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Invalid URL format",
            "shortUrl": None,
            "shortCode": None,
            "originalUrl": None,
            "expiresAt": None,
        }
        assert len(store) == 0

    def test_missing_url(self, client: TestClient):
        response = client.post("/shorten", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Original URL is required"

    @pytest.mark.parametrize("body", [
        {"originalUrl": None},
        {"originalUrl": "https://example.com", "ownerId": "abc"},
        {"originalUrl": "https://example.com", "expiresAt": "not-a-date"},
    ])
    def test_malformed_body(self, client: TestClient, store, body):
        """Type errors in the body are reported like any other failed shorten"""
        response = client.post("/shorten", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"]
        assert data["shortCode"] is None
        assert len(store) == 0

    def test_long_url(self, client: TestClient):
        long_url = "https://example.com/?q=" + "a" * 2100
        data = shorten(client, originalUrl=long_url)

        response = client.get(f"/{data['shortCode']}", follow_redirects=False)
        assert response.headers["location"] == long_url

    def test_alias_of_fixed_route(self, client: TestClient):
        response = client.post("/shorten", json={"originalUrl": "https://example.com", "customAlias": "health"})

        assert response.status_code == 400
        assert response.json()["message"] == "Custom alias is reserved"
        assert client.get("/health").json()["status"] == "healthy"

    def test_redirect_nonexistent_url(self, client: TestClient):
        response = client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"message": "Short URL not found or expired"}

    def test_expired_url(self, client: TestClient):
        past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
        code = shorten(client, originalUrl="https://example.com", expiresAt=past)["shortCode"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 404

        stats = client.get(f"/{code}/stats").json()
        assert stats["isActive"] is False
        assert stats["clickCount"] == 0

    def test_stats_of_unknown_code(self, client: TestClient):
        response = client.get("/never-created/stats")

        assert response.status_code == 404
        assert response.json() == {"message": "Short URL not found"}

    def test_delete_url(self, client: TestClient):
        code = shorten(client, originalUrl="https://www.python.org")["shortCode"]

        response = client.delete(f"/{code}")
        assert response.status_code == 200
        assert response.json() == {"message": "URL deleted successfully"}

        assert client.get(f"/{code}", follow_redirects=False).status_code == 404
        assert client.get(f"/{code}/stats").status_code == 404

    def test_delete_with_wrong_owner(self, client: TestClient):
        code = shorten(client, originalUrl="https://example.com", ownerId=1)["shortCode"]

        response = client.delete(f"/{code}", params={"userId": 2})

        assert response.status_code == 404
        assert client.get(f"/{code}/stats").status_code == 200

    def test_user_urls(self, client: TestClient):
        first = shorten(client, originalUrl="https://a.example.com", ownerId=3)["shortCode"]
        second = shorten(client, originalUrl="https://b.example.com", ownerId=3)["shortCode"]
        shorten(client, originalUrl="https://c.example.com", ownerId=4)

        data = client.get("/user/3").json()

        assert [item["shortCode"] for item in data] == [second, first]

    def test_check_alias(self, client: TestClient):
        assert client.get("/check-alias/abc").json() == {
            "alias": "abc",
            "available": True,
            "message": "Alias is available",
        }
        assert client.get("/check-alias/ab").json()["available"] is False

    def test_health(self, client: TestClient):
        assert client.get("/health").json()["status"] == "healthy"


class TestURLService:
    """Test URL service business logic directly"""

    def test_shorten_same_url_twice(self, store):
        service = URLService(store)

        first = service.shorten(ShortenRequest(original_url="https://www.test.com/"))
        second = service.shorten(ShortenRequest(original_url="https://www.test.com/"))

        assert first.short_code == second.short_code
        assert first.message == "URL shortened successfully"
        assert second.message == "URL already shortened"

    def test_export_csv(self, store):
        service = URLService(store)
        service.shorten(ShortenRequest(
            original_url="https://example.com",
            custom_alias="exp",
            expires_at=datetime(2030, 6, 1, tzinfo=timezone.utc)
        ))
        service.shorten(ShortenRequest(original_url="https://other.com", custom_alias="noexp"))

        lines = service.export_csv().splitlines()

        assert lines[0] == "ShortCode,OriginalUrl,CreatedAt,ClickCount,IsActive,ExpiresAt"
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        assert lines[1] == f"noexp,https://other.com,{today},0,True,"
        assert lines[2] == f"exp,https://example.com,{today},0,True,2030-06-01"
