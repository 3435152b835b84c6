from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit
import logging

from pydantic import ValidationError

from .context import RenderContext
from .errors import WidgetDataError
from .page import Page
from .refresh import CacheThenRefresh


def with_query(url: str, **params: Any) -> str:
    """Append query parameters to a URL that may already carry some"""
    scheme, netloc, path, query, fragment = urlsplit(url)
    extra = urlencode({key: str(value) for key, value in params.items()})
    query = f"{query}&{extra}" if query else extra
    return urlunsplit((scheme, netloc, path, query, fragment))


class SiteWidget(ABC):
    """A unit of page behavior activated by the routing table"""

    def __init__(self, app, config: Dict[str, Any]):
        self.app = app
        self.config = config or {}
        self.logger = logging.getLogger(self.name)

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the widget"""
        pass

    @abstractmethod
    def paint(self, page: Page, ctx: RenderContext) -> None:
        """Apply the widget to the page"""
        pass


class RefreshWidget(SiteWidget):
    """Widget painted by the cache-then-refresh cycle

    Subclasses describe their endpoint, how a response body is turned into the
    value they render, and how that value is written into the page.
    """
    cache_key: Optional[str] = None
    default_url: str = ""
    eager_fallback: bool = False

    @property
    def url(self) -> str:
        return self.config.get("url", self.default_url)

    @property
    def store_key(self) -> Optional[str]:
        return self.config.get("cache_key", self.cache_key)

    def build_url(self, ctx: RenderContext) -> str:
        return self.url

    def request_headers(self) -> Dict[str, str]:
        return {}

    def extract(self, payload: Any) -> Any:
        """Validate a response body; raise WidgetDataError when it cannot be rendered"""
        return payload

    @abstractmethod
    def render(self, page: Page, ctx: RenderContext, value: Any) -> None:
        pass

    def render_fallback(self, page: Page, ctx: RenderContext) -> None:
        """Static content shown when neither cache nor network produced anything"""
        pass

    def _extract(self, payload: Any) -> Any:
        try:
            return self.extract(payload)
        except ValidationError as e:
            raise WidgetDataError(f"{self.name}: {e.error_count()} validation error(s)") from e
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise WidgetDataError(f"{self.name}: unexpected payload shape ({e})") from e

    def refresher(self, page: Page, ctx: RenderContext) -> CacheThenRefresh:
        return CacheThenRefresh(
            store=self.app.store,
            cache_key=self.store_key,
            url=self.build_url(ctx),
            render=lambda value: self.render(page, ctx, value),
            extract=self._extract,
            fallback=lambda: self.render_fallback(page, ctx),
            session=self.app.http_session,
            headers=self.request_headers(),
            timeout=self.app.http_timeout,
            eager_fallback=self.eager_fallback,
            logger=self.logger,
        )

    def paint(self, page: Page, ctx: RenderContext) -> None:
        self.refresher(page, ctx).run()
