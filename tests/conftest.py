"""
Shared fixtures: a throwaway SQLite store, a scripted HTTP session and host pages.
"""
import json
from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import pytest
import requests
import yaml

from masjid_widgets.core.app import SiteApp
from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.dates import parse_datetime
from masjid_widgets.core.db import init_db, reset_db
from masjid_widgets.core.local_store import LocalStore

DUBLIN = ZoneInfo("Europe/Dublin")
FRIDAY = datetime(2025, 12, 5, 10, 0, tzinfo=DUBLIN)
TUESDAY = datetime(2025, 12, 2, 10, 0, tzinfo=DUBLIN)
RAMADAN_START = parse_datetime("2026-02-17T17:56:00", DUBLIN)

HOME_HTML = """<!DOCTYPE html>
<html><head><title>Masjid</title><script src="assets/js/vendor.js"></script></head>
<body>
<nav>
  <span id="nav-hijri">-</span><span id="nav-cur-month">-</span>
  <a id="salah-times" href="#">Timetable</a>
  <table>
    <tr><td id="nav-fajr-begins">-</td><td id="nav-fajr-jamaat">-</td></tr>
    <tr><td id="nav-sunrise">-</td></tr>
    <tr><td id="nav-zohr-begins">-</td><td id="nav-zohr-jamaat">-</td></tr>
    <tr><td id="nav-asar-begins">-</td><td id="nav-asar-jamaat">-</td></tr>
    <tr><td id="nav-magrib-begins">-</td><td id="nav-magrib-jamaat">-</td></tr>
    <tr><td id="nav-isha-begins">-</td><td id="nav-isha-jamaat">-</td></tr>
  </table>
</nav>
<div id="announcement-bar" class="d-none"><div id="announcement"></div></div>
<ul id="jummah-schedule"><li class="list-group-item">Jummah</li></ul>
<section>
  <span id="cur-month">-</span>
  <span id="fajr">-</span><span id="sunrise">-</span><span id="dhuhr">-</span>
  <span id="asr">-</span><span id="maghrib">-</span><span id="isha">-</span>
  <a id="salah-times-body" href="#">Download</a>
</section>
<div class="dotCircle">
  <span class="itemDot active" data-tab="3"></span><span class="itemDot" data-tab="1"></span>
  <div class="CirItem CirItem1"></div><div class="CirItem CirItem3 active"></div>
</div>
<div id="live-now"></div><span id="event-name"></span><span id="starts-at"></span>
<span id="event-day"></span><span id="event-date"></span><span id="event-month"></span><span id="event-year"></span>
<blockquote><div id="hadith-body"></div><cite id="hadith-cite"></cite><a id="hadith-link" href="#">Read</a></blockquote>
<div id="notice-board"><div id="noticeContainer" class="grid-gallery"></div></div>
<div id="myModal" class="modal fade"></div>
<div id="cookie-bar" class="cookie-bar"></div>
<footer><span id="footer-year"></span><span id="footer-cur-month"></span>
<a id="salah-times-footer" href="#">Timetable</a></footer>
</body></html>
"""

ACTIVITIES_HTML = """<!DOCTYPE html>
<html><head><title>Activities</title></head>
<body>
<div id="live-now"></div><span id="event-name"></span><span id="starts-at"></span>
<span id="event-day"></span><span id="event-date"></span><span id="event-month"></span><span id="event-year"></span>
<table><tbody id="weekly-programmes-tbody"></tbody></table>
<section id="weekly-programmes-section"><div id="weekly-programmes"></div></section>
<footer><span id="footer-year"></span></footer>
</body></html>
"""

IQAMAH_PAYLOAD = {
    "scope": "day",
    "year": 2025,
    "month": "December",
    "day": 5,
    "data": [{
        "fajarTime": "06:45 AM",
        "fajarJamahTime": "07:15 AM",
        "sunriseTime": "08:35 AM",
        "dhuharTime": "12:30 PM",
        "zohrJamahTime": "01:15 PM",
        "asrTime": "02:05 PM",
        "asarJamahTime": "02:30 PM",
        "maghribTime": "04:20 PM",
        "maghribJamahTime": "04:25 PM",
        "ishaTime": "06:10 PM",
        "ishaJamahTime": "07:30 PM",
        "hijriDay": 14,
        "hijriMonthName": "Jumada al-Akhirah",
        "hijriYear": 1447,
    }],
}


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Answers GETs by URL prefix; unknown URLs fail like an unreachable host"""

    def __init__(self, routes: Optional[Dict[str, FakeResponse]] = None):
        self.routes = routes or {}
        self.calls: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}

    def get(self, url: str, headers=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        for prefix, response in self.routes.items():
            if url.startswith(prefix):
                return response
        raise requests.ConnectionError(f"No route to {url}")

    def called(self, prefix: str) -> bool:
        return any(call["url"].startswith(prefix) for call in self.calls)

    def close(self) -> None:
        pass


@pytest.fixture
def store(tmp_path):
    reset_db()
    init_db(db_url=f"sqlite:///{tmp_path / 'store.db'}")
    yield LocalStore()
    reset_db()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def make_ctx():
    def _make(now: datetime = FRIDAY, cookies: Optional[Dict[str, str]] = None) -> RenderContext:
        return RenderContext(now=now, ramadan_start=RAMADAN_START, cookies=cookies or {})
    return _make


@pytest.fixture
def site_dir(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text(HOME_HTML, encoding="utf-8")
    (root / "activities.html").write_text(ACTIVITIES_HTML, encoding="utf-8")
    return root


@pytest.fixture
def config_path(tmp_path, site_dir):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "logging": {"level": "DEBUG", "file": None},
        "database": {"path": str(tmp_path / "app_store.db")},
        "site": {"root": "site", "output": "build", "timezone": "Europe/Dublin",
                 "ramadan_start": "2026-02-17T17:56:00"},
    }))
    return path


@pytest.fixture
def site_app(config_path, fake_session):
    reset_db()
    app = SiteApp(config_path=str(config_path), setup_logging=False)
    app.http_session = fake_session
    yield app
    app.close()
    reset_db()
