from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

_ASYNC_DRIVER_PREFIXES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
}


def normalize_database_url(database_url: str) -> str:
    url = str(database_url or "").strip()
    if not url:
        return url
    for prefix, replacement in _ASYNC_DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            url = replacement + url[len(prefix) :]
            break
    if not url.startswith("postgresql+asyncpg://"):
        return url
    parsed = urlparse(url)
    clean = []
    ssl_requested = False
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        if key == "sslmode":
            ssl_requested = value != "disable"
            continue
        if key in {"channel_binding", "ssl"}:
            continue
        clean.append((key, value))
    if ssl_requested:
        clean.append(("ssl", "true"))
    return urlunparse(parsed._replace(query=urlencode(clean)))


def is_remote_host(database_url: str) -> bool:
    host = urlparse(database_url).hostname or ""
    return bool(host) and host not in {"localhost", "127.0.0.1"}


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = normalize_database_url(get_settings().database_url)
        engine_kwargs: dict = {"pool_pre_ping": True}
        if db_url.startswith("postgresql+asyncpg://"):
            engine_kwargs.update(pool_size=10, max_overflow=5)
            if is_remote_host(db_url) and "ssl=" not in db_url:
                engine_kwargs["connect_args"] = {"ssl": True}
        logger.info("Creating database engine for %s", urlparse(db_url).scheme)
        _engine = create_async_engine(db_url, **engine_kwargs)
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory
