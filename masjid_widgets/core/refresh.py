"""
Cache-then-refresh: paint from the local store, fetch, persist, repaint.

The fetch step touches only the network so it can run on a worker thread; painting
from cache and applying a fetch result (store write plus render) happen on the
caller's thread.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from masjid_widgets.core.errors import WidgetDataError
from masjid_widgets.core.local_store import LocalStore


@dataclass
class FetchOutcome:
    """Result of one GET: the parsed body, or the error that stopped it"""
    url: str
    body: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CacheThenRefresh:
    def __init__(
        self,
        store: Optional[LocalStore],
        cache_key: Optional[str],
        url: str,
        render: Callable[[Any], None],
        extract: Optional[Callable[[Any], Any]] = None,
        fallback: Optional[Callable[[], None]] = None,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        eager_fallback: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            store: Local store; None or cache_key None disables caching
            cache_key: Name of the store entry holding the last good response body
            url: Endpoint to GET
            render: Paints an extracted value
            extract: Turns a response body into the value render expects; raises
                WidgetDataError when the body has the wrong shape
            fallback: Paints static content when nothing else could be painted
            eager_fallback: Paint the fallback right away when the cache is empty
        """
        self.store = store
        self.cache_key = cache_key
        self.url = url
        self.render = render
        self.extract = extract or (lambda body: body)
        self.fallback = fallback
        self.session = session or requests.Session()
        self.headers = headers or {}
        self.timeout = timeout
        self.eager_fallback = eager_fallback
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.painted = False

    @property
    def caching(self) -> bool:
        return self.store is not None and self.cache_key is not None

    def paint_cached(self) -> bool:
        """Render the stored payload if there is a usable one"""
        cached = self.store.get_json(self.cache_key) if self.caching else None
        if cached is not None:
            try:
                value = self.extract(cached)
            except WidgetDataError as e:
                self.logger.warning(f"Ignoring cached {self.cache_key}: {e}")
            else:
                self.logger.debug(f"Painting {self.cache_key} from cache")
                self.render(value)
                self.painted = True
                return True
        if self.eager_fallback and self.fallback:
            self.fallback()
            self.painted = True
        return False

    def fetch(self) -> FetchOutcome:
        """GET the endpoint and parse JSON. Never raises."""
        try:
            self.logger.info(f"Fetching {self.url}")
            response = self.session.get(self.url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return FetchOutcome(url=self.url, body=response.json())
        except (requests.RequestException, ValueError) as e:
            return FetchOutcome(url=self.url, error=e)

    def apply(self, outcome: FetchOutcome) -> bool:
        """Persist and render a fetch result; on failure keep the previous paint"""
        if outcome.ok:
            try:
                value = self.extract(outcome.body)
            except WidgetDataError as e:
                outcome.error = e
        if not outcome.ok:
            self.logger.error(f"Error refreshing {self.cache_key or self.url}: {outcome.error}")
            if not self.painted and self.fallback:
                self.fallback()
                self.painted = True
            return False

        if self.caching:
            self.store.set_json(self.cache_key, outcome.body)
        self.render(value)
        self.painted = True
        return True

    def run(self) -> bool:
        self.paint_cached()
        return self.apply(self.fetch())


def cache_then_refresh(
    store: Optional[LocalStore],
    cache_key: Optional[str],
    url: str,
    render: Callable[[Any], None],
    **kwargs: Any,
) -> bool:
    """Run the whole paint/fetch/persist/repaint cycle on the current thread"""
    return CacheThenRefresh(store, cache_key, url, render, **kwargs).run()
