"""
FastAPI server: serves painted host pages and exposes the local store.
Endpoints: GET /api/widgets, GET /api/cache, GET /api/cache/{key}, GET /{page path}.
Docs: http://<host>:<port>/docs
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Keys to exclude from widget config in API (secrets)
_CONFIG_SECRET_KEYS = frozenset(
    {"api_key", "password", "token", "secret", "credentials", "client_secret"}
)


def _safe_widget_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return config with secret keys omitted."""
    if not config:
        return {}
    return {k: v for k, v in config.items() if k.lower() not in _CONFIG_SECRET_KEYS}


class CachedResourceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    updated_at: Optional[datetime] = None


class CachedResourceResponse(BaseModel):
    """Pydantic view of CachedResource; value is the decoded JSON payload."""

    key: str
    updated_at: Optional[datetime] = None
    value: Any = None


def create_app(site_app: Any) -> FastAPI:
    """Create FastAPI app with routes that use the given SiteApp instance."""
    app = FastAPI(title="Masjid Widgets", description="Painted pages and widget caches")

    @app.get("/api/widgets")
    def list_widgets() -> List[Dict[str, Any]]:
        """List registered widgets with enabled state and safe config."""
        widgets_data = []
        for name, widget_class in sorted(site_app.registry.widgets.items()):
            config = site_app.config.get_widget_config(name)
            widgets_data.append({
                "name": name,
                "enabled": config.get("enable", True),
                "cache_key": config.get("cache_key", getattr(widget_class, "cache_key", None)),
                "config": _safe_widget_config(config),
            })
        return widgets_data

    @app.get("/api/cache", response_model=List[CachedResourceSummary])
    def list_cache() -> List[CachedResourceSummary]:
        """List local store keys with their last write time."""
        return [CachedResourceSummary.model_validate(row) for row in site_app.store.list_records()]

    @app.get("/api/cache/{key}", response_model=CachedResourceResponse)
    def get_cache_entry(key: str) -> CachedResourceResponse:
        """Return one stored payload."""
        record = site_app.store.get_record(key)
        if record is None:
            raise HTTPException(status_code=404, detail=f"No cached value for {key}")
        try:
            value = json.loads(record.value)
        except ValueError:
            value = record.value
        return CachedResourceResponse(key=record.key, updated_at=record.updated_at, value=value)

    @app.get("/{page_path:path}", response_class=HTMLResponse)
    def get_page(page_path: str, request: Request) -> HTMLResponse:
        """Serve a host page from the site root with its widgets painted."""
        url = "/" + page_path
        source = site_app.resolve_page_file(url)
        if source is None:
            raise HTTPException(status_code=404, detail="Page not found")
        html = site_app.render_html(
            source.read_text(encoding="utf-8"),
            url=url,
            cookies=dict(request.cookies),
        )
        return HTMLResponse(html)

    return app


def run_api_server(site_app: Any) -> None:
    """Serve the site with uvicorn on api.host / api.port (blocking)."""
    import uvicorn

    api_config = site_app.config.data.get("api") or {}
    host = api_config.get("host", "127.0.0.1")
    port = int(api_config.get("port", 8765))
    fastapi_app = create_app(site_app)
    logger.info(f"API server listening at http://{host}:{port} (docs at /docs)")
    uvicorn.run(fastapi_app, host=host, port=port)
