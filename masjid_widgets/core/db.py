"""
Database setup for the local store. One engine per process, bound by init_db().
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_DB_PATH = Path.home() / ".masjid_widgets" / "local_store.db"

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _sqlite_url(path: Path) -> str:
    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def resolve_db_url(config_data: Optional[Dict[str, Any]] = None) -> str:
    """database.url wins over database.path; neither falls back to the per-user store"""
    db_config = (config_data or {}).get("database") or {}
    if db_config.get("url"):
        return db_config["url"]
    if db_config.get("path"):
        return _sqlite_url(Path(db_config["path"]))
    return _sqlite_url(DEFAULT_DB_PATH)


def init_db(config_data: Optional[Dict[str, Any]] = None, db_url: Optional[str] = None) -> None:
    """Bind the engine and create the cache table. Later calls are no-ops until reset_db()."""
    global _engine, _session_factory

    if _engine is not None:
        logger.debug("Database already initialized")
        return

    db_url = db_url or resolve_db_url(config_data)
    connect_args = {}
    if db_url.startswith("sqlite"):
        # Fetch results are written from the render thread, API reads come from uvicorn workers
        connect_args["check_same_thread"] = False
    _engine = create_engine(db_url, future=True, connect_args=connect_args)

    # Registers CachedResource on Base
    from masjid_widgets.core import models  # noqa: F401

    Base.metadata.create_all(_engine)
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    logger.info(f"Local store at {db_url.split('?')[0]}")


def reset_db() -> None:
    """Dispose the engine so init_db() can bind a different database."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def session_scope() -> Iterator[Session]:
    """One unit of work: commit when the block exits cleanly, roll back otherwise."""
    if _session_factory is None:
        raise RuntimeError("Local store is not initialized; call init_db() first")
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
