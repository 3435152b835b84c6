from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo
import logging
import sys

import requests

from .config import Config
from .context import RenderContext
from .dates import DEFAULT_TIMEZONE, parse_datetime
from .db import init_db
from .dispatcher import FetchDispatcher
from .local_store import LocalStore
from .page import Page
from .refresh import CacheThenRefresh, FetchOutcome
from .routing import widgets_for_url
from .widget_base import RefreshWidget, SiteWidget
from .widget_registry import WidgetRegistry

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def page_url_for(relative_path: Path) -> str:
    """Map a site-relative HTML file to the URL it is served at (index.html -> directory)"""
    parts = relative_path.as_posix()
    if parts == "index.html":
        return "/"
    if parts.endswith("/index.html"):
        return "/" + parts[: -len("index.html")]
    return "/" + parts


class SiteApp:
    def __init__(self, config_path: Optional[str] = None, config: Optional[Config] = None,
                 setup_logging: bool = True):
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = config or Config(config_path=config_path)
        if setup_logging:
            self._setup_logging()

        # Initialize database (before the store so tables exist)
        init_db(self.config.data)
        self.store = LocalStore()

        self.registry = WidgetRegistry()
        self.dispatcher = FetchDispatcher()

        http_config = self.config.data.get("http") or {}
        self.http_timeout = http_config.get("timeout")
        self.fetch_wait = http_config.get("wait")
        self.http_session = requests.Session()
        if http_config.get("user_agent"):
            self.http_session.headers["User-Agent"] = http_config["user_agent"]

        site_config = self.config.data["site"]
        self.timezone = ZoneInfo(site_config.get("timezone") or DEFAULT_TIMEZONE)
        self.ramadan_start = parse_datetime(site_config.get("ramadan_start"), self.timezone)
        self.routes = self.config.data.get("routes") or {}

    def _setup_logging(self) -> None:
        """Configure logging level and optional log file from config"""
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, str(self.config.data["logging"]["level"]).upper(), logging.INFO))

        formatter = logging.Formatter(LOG_FORMAT)
        if not root_logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        log_file = self.config.data["logging"].get("file")
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        logging.info("Masjid widgets starting...")

    def make_context(self, cookies: Optional[Dict[str, str]] = None,
                     now: Optional[datetime] = None) -> RenderContext:
        if now is None:
            now = datetime.now(self.timezone)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=self.timezone)
        return RenderContext(now=now, ramadan_start=self.ramadan_start, cookies=dict(cookies or {}))

    def create_widgets(self, names: Iterable[str]) -> List[SiteWidget]:
        widgets = []
        for name in names:
            widget = self.registry.create_widget(self, name, self.config.get_widget_config(name))
            if widget:
                widgets.append(widget)
        return widgets

    def start(self, page: Page, widget_names: Optional[Iterable[str]] = None,
              cookies: Optional[Dict[str, str]] = None, now: Optional[datetime] = None) -> Page:
        """Activate widgets on a page once.

        Cached and static content is painted first, then every fetch runs
        concurrently and each result is applied here as it arrives, for at most
        http.wait seconds. A widget that has not answered by then keeps its cached
        or fallback paint. A failing widget is logged and never stops the others.
        """
        if widget_names is None:
            widget_names = widgets_for_url(page.url, self.routes)
        ctx = self.make_context(cookies, now)

        refreshers = {}
        for widget in self.create_widgets(widget_names):
            try:
                if isinstance(widget, RefreshWidget):
                    refresher = widget.refresher(page, ctx)
                    refresher.paint_cached()
                    refreshers[widget.name] = refresher
                else:
                    widget.paint(page, ctx)
            except Exception as e:
                self.logger.error(f"Widget {widget.name} failed to paint: {e}", exc_info=True)

        jobs = {name: refresher.fetch for name, refresher in refreshers.items()}
        for name, outcome in self.dispatcher.run(jobs, wait=self.fetch_wait):
            refresher = refreshers.pop(name)
            if not isinstance(outcome, FetchOutcome):
                outcome = FetchOutcome(url=refresher.url, error=outcome)
            self._apply(name, refresher, outcome)

        # Still waiting on these: treat as failed so they keep cache or get their fallback
        for name, refresher in refreshers.items():
            timeout = TimeoutError(f"no response within {self.fetch_wait}s")
            self._apply(name, refresher, FetchOutcome(url=refresher.url, error=timeout))
        return page

    def _apply(self, name: str, refresher: CacheThenRefresh, outcome: FetchOutcome) -> None:
        try:
            refresher.apply(outcome)
        except Exception as e:
            self.logger.error(f"Widget {name} failed to render fetch result: {e}", exc_info=True)

    def render_html(self, html: str, url: str, cookies: Optional[Dict[str, str]] = None,
                    now: Optional[datetime] = None) -> str:
        page = Page(html, url=url)
        self.start(page, cookies=cookies, now=now)
        return page.html()

    def resolve_page_file(self, path: str) -> Optional[Path]:
        """Map a request path to an HTML file under the site root; None if outside or missing"""
        root = self.config.site_root
        relative = path.lstrip("/")
        candidate = (root / relative).resolve()
        if candidate.is_dir() or path.endswith("/") or not relative:
            candidate = (candidate / "index.html").resolve()
        if root != candidate and root not in candidate.parents:
            self.logger.warning(f"Refusing path outside site root: {path}")
            return None
        if not candidate.is_file():
            return None
        return candidate

    def render_site(self) -> List[Path]:
        """Paint every HTML page under the site root into the output directory"""
        root = self.config.site_root
        output = self.config.output_dir
        written = []
        for source in sorted(root.rglob("*.html")):
            if output in source.parents:
                continue
            relative = source.relative_to(root)
            target = output / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            url = page_url_for(relative)
            self.logger.info(f"Rendering {relative} as {url}")
            target.write_text(self.render_html(source.read_text(encoding="utf-8"), url), encoding="utf-8")
            written.append(target)
        return written

    def close(self) -> None:
        self.http_session.close()
