"""
HTTP tests for the HTML pages and the JSON API.
"""

import re

import pytest
from fastapi.testclient import TestClient

from shortener.core.exceptions import StorageError
from shortener.db.models import DEFAULT_QUOTE
from shortener.main import create_app
from shortener.services.link_service import LinkService

SHORT_URL_RE = re.compile(r"http://testserver/s/([0-9A-Za-z]{6})")


def shorten(client, **form):
    return client.post("/shorten", data=form)


def code_from(response) -> str:
    match = SHORT_URL_RE.search(response.text)
    assert match, response.text
    return match.group(1)


class TestPages:

    def test_index_shows_form(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'name="url"' in response.text
        assert 'action="/shorten"' in response.text

    def test_shorten_shows_short_url_and_code(self, client):
        response = shorten(client, url="https://example.org", title="T", description="D")
        assert response.status_code == 200
        code = code_from(response)
        assert f"<code>{code}</code>" in response.text

    @pytest.mark.parametrize("form", [
        {},
        {"url": ""},
        {"url": "not-a-url"},
        {"url": "javascript:alert(1)"},
    ])
    def test_shorten_rejects_bad_url(self, client, form):
        response = shorten(client, title="kept", **form)
        assert response.status_code == 400
        assert 'role="alert"' in response.text
        assert 'value="kept"' in response.text

    def test_preview_page(self, client):
        code = code_from(shorten(
            client,
            url="https://example.org/page",
            title="My title",
            description="My description",
            image="https://example.org/img.png",
        ))

        response = client.get(f"/s/{code}")
        assert response.status_code == 200
        body = response.text
        assert "My title" in body
        assert "My description" in body
        assert 'src="https://example.org/img.png"' in body
        assert DEFAULT_QUOTE in body
        assert 'href="https://example.org/page"' in body
        assert 'property="og:title" content="My title"' in body
        assert 'content="3;url=https://example.org/page"' in body

    def test_preview_escapes_metadata(self, client):
        code = code_from(shorten(client, url="https://example.org", title="<script>x</script>"))

        body = client.get(f"/s/{code}").text
        assert "<script>x</script>" not in body
        assert "&lt;script&gt;x&lt;/script&gt;" in body

    def test_preview_unknown_code(self, client):
        response = client.get("/s/doesnotexist")
        assert response.status_code == 404
        assert "does not exist" in response.text

    def test_preview_with_zero_delay_navigates_immediately(self, settings):
        settings.REDIRECT_DELAY_SECONDS = 0
        with TestClient(create_app(settings)) as client:
            code = code_from(shorten(client, url="https://example.org"))
            body = client.get(f"/s/{code}").text
        assert 'content="0;url=https://example.org"' in body
        assert "window.location.replace(target)" in body

    def test_preview_does_not_redirect_server_side(self, client):
        code = code_from(shorten(client, url="https://example.org"))
        response = client.get(f"/s/{code}", follow_redirects=False)
        assert response.status_code == 200


class TestJSONAPI:

    def test_get_link_metadata(self, client):
        code = code_from(shorten(client, url="https://example.org", title="T", description="D"))

        response = client.get(f"/api/link/{code}")
        assert response.status_code == 200
        data = response.json()
        assert data["code"] == code
        assert data["url"] == "https://example.org"
        assert data["title"] == "T"
        assert data["description"] == "D"
        assert data["image"] == ""
        assert data["quote"] == DEFAULT_QUOTE
        assert data["short_url"] == f"http://testserver/s/{code}"
        assert data["created_at"]

    def test_get_link_metadata_not_found(self, client):
        response = client.get("/api/link/doesnotexist")
        assert response.status_code == 404
        assert "detail" in response.json()

    def test_api_shorten(self, client):
        response = client.post("/api/shorten", json={"url": "https://example.com", "quote": "Q"})
        assert response.status_code == 201
        data = response.json()
        assert len(data["code"]) == 6
        assert data["url"] == "https://example.com"
        assert data["short_url"] == f"http://testserver/s/{data['code']}"

        stored = client.get(f"/api/link/{data['code']}").json()
        assert stored["quote"] == "Q"

    def test_api_shorten_invalid_url(self, client):
        response = client.post("/api/shorten", json={"url": "not-a-url"})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        {},
        {"title": "x"},
        {"url": None},
        {"url": 5},
    ])
    def test_api_shorten_missing_or_non_text_url(self, client, body):
        response = client.post("/api/shorten", json=body)
        assert response.status_code == 400
        assert response.json()["detail"]

    def test_api_shorten_same_url_twice(self, client):
        first = client.post("/api/shorten", json={"url": "https://example.com"}).json()
        second = client.post("/api/shorten", json={"url": "https://example.com"}).json()
        assert first["code"] != second["code"]


class TestConfiguration:

    def test_base_url_setting_used_for_short_links(self, settings):
        settings.BASE_URL = "https://sho.rt/"
        with TestClient(create_app(settings)) as client:
            data = client.post("/api/shorten", json={"url": "https://example.com"}).json()
        assert data["short_url"] == f"https://sho.rt/s/{data['code']}"

    def test_code_length_setting(self, settings):
        settings.SHORT_CODE_LENGTH = 8
        with TestClient(create_app(settings)) as client:
            data = client.post("/api/shorten", json={"url": "https://example.com"}).json()
        assert len(data["code"]) == 8

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert "X-Process-Time" in response.headers


class TestStorageFailures:
    """Storage errors surface as 500 without internal details."""

    @pytest.fixture
    def failing_storage(self, monkeypatch):
        async def fail(self, *args, **kwargs):
            raise StorageError("disk on fire")

        monkeypatch.setattr(LinkService, "create", fail)
        monkeypatch.setattr(LinkService, "resolve", fail)

    def test_shorten_page(self, client, failing_storage):
        response = shorten(client, url="https://example.com")
        assert response.status_code == 500
        assert "disk on fire" not in response.text

    def test_preview_page(self, client, failing_storage):
        response = client.get("/s/abc123")
        assert response.status_code == 500
        assert "disk on fire" not in response.text

    def test_api(self, client, failing_storage):
        assert client.post("/api/shorten", json={"url": "https://example.com"}).status_code == 500
        response = client.get("/api/link/abc123")
        assert response.status_code == 500
        assert "disk on fire" not in response.text


def test_rate_limit_on_shorten(settings):
    from shortener.core.rate_limit import limiter

    settings.RATE_LIMIT_ENABLED = True
    limiter.reset()
    try:
        with TestClient(create_app(settings)) as client:
            statuses = [
                client.post("/api/shorten", json={"url": "https://example.com"}).status_code
                for _ in range(11)
            ]
    finally:
        limiter.reset()
        limiter.enabled = False

    assert statuses[:10] == [201] * 10
    assert statuses[10] == 429
