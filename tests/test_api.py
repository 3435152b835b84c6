"""Tests for the HTTP surface: painted pages and the cache inspection endpoints."""

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from masjid_widgets.api.server import _safe_widget_config, create_app
from conftest import IQAMAH_PAYLOAD, FakeResponse, FakeSession


@pytest.fixture
def client(site_app):
    return TestClient(create_app(site_app))


def test_safe_widget_config_hides_secrets():
    assert _safe_widget_config({"url": "https://x", "api_key": "k", "Token": "t"}) == {"url": "https://x"}
    assert _safe_widget_config(None) == {}


def test_list_widgets(client):
    response = client.get("/api/widgets")

    assert response.status_code == 200
    widgets = {item["name"]: item for item in response.json()}
    assert widgets["iqamah"]["cache_key"] == "iqamah-today"
    assert widgets["iqamah"]["enabled"] is True
    assert widgets["live_event"]["cache_key"] is None
    assert {"footer_year", "chat_widget", "programmes", "announcements"} <= set(widgets)


def test_cache_listing_and_lookup(client, site_app):
    site_app.store.set_json("iqamah-today", IQAMAH_PAYLOAD)

    listing = client.get("/api/cache").json()
    entry = client.get("/api/cache/iqamah-today").json()

    assert [item["key"] for item in listing] == ["iqamah-today"]
    assert entry["value"] == IQAMAH_PAYLOAD
    assert entry["updated_at"] is not None


def test_missing_cache_key_is_404(client):
    assert client.get("/api/cache/notices").status_code == 404


def test_page_is_served_painted(client, site_app):
    site_app.http_session = FakeSession({"https://getiqamahtimes": FakeResponse(body=IQAMAH_PAYLOAD)})

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert '<span id="fajr">06:45 am</span>' in response.text
    assert site_app.store.get_json("iqamah-today") == IQAMAH_PAYLOAD


def test_page_uses_request_cookies(client):
    client.cookies.set("kicc-accept-cookie", "true")

    response = client.get("/")

    cookie_bar = BeautifulSoup(response.text, "html.parser").find(id="cookie-bar")
    assert cookie_bar["style"] == "display: none"
    assert "show" not in cookie_bar["class"]


def test_activities_page(client):
    response = client.get("/activities.html")

    assert response.status_code == 200
    assert "Children's Youth Programme" in response.text


def test_unknown_page_is_404(client):
    assert client.get("/missing.html").status_code == 404
