"""
Async database access helpers (raw SQL) using asyncpg.

This module builds the connection pool but does not own it. The FastAPI
lifespan creates it on startup, keeps it on `app.state.pool` and closes it on
shutdown (see `api/main.py`). Handlers receive it through `get_pool`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

DEFAULT_POOL_MAX_SIZE = 10
DEFAULT_POOL_MIN_SIZE = 5
DEFAULT_POOL_MAX_IDLE_SECONDS = 30 * 60

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _strip_sslmode(dsn: str) -> str:
    # asyncpg does not need libpq's sslmode flag (e.g. `?sslmode=disable`).
    parts = urlsplit(dsn)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    kept = [pair for pair in pairs if pair[0] != "sslmode"]
    if len(kept) == len(pairs):
        return dsn
    return urlunsplit(parts._replace(query=urlencode(kept)))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _strip_sslmode(url)


def pool_sizes() -> tuple[int, int]:
    """
    Return (min_size, max_size) for the pool, min never above max.
    """
    max_size = max(1, _env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE))
    min_size = min(_env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE), max_size)
    return min_size, max_size


async def create_pool(dsn: str | None = None) -> asyncpg.Pool:
    """
    Create the bounded connection pool.

    Requests beyond `max_size` wait for a free connection. Idle connections
    are closed after `DB_POOL_MAX_IDLE_SECONDS` so none goes stale.
    """
    min_size, max_size = pool_sizes()
    max_idle = _env_int("DB_POOL_MAX_IDLE_SECONDS", DEFAULT_POOL_MAX_IDLE_SECONDS)
    pool = await asyncpg.create_pool(
        dsn=dsn or database_url(),
        min_size=min_size,
        max_size=max_size,
        max_inactive_connection_lifetime=float(max_idle),
    )
    logger.info("db_pool_created min_size=%s max_size=%s max_idle_s=%s", min_size, max_size, max_idle)
    return pool


async def ping(pool: asyncpg.Pool) -> None:
    await pool.fetchval("SELECT 1")


def get_pool(request: Request) -> asyncpg.Pool:
    """
    FastAPI dependency returning the pool created by the app lifespan.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. It is created in the app lifespan.")
    return pool


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    First row of `sql` as a plain dict, None when the query matches nothing.
    """
    row = await pool.fetchrow(sql, *args)
    if row is None:
        return None
    return dict(row)


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    rows = await pool.fetch(sql, *args)
    return [dict(row) for row in rows]


async def execute(pool: asyncpg.Pool, sql: str, *args: Any) -> None:
    # The status string asyncpg returns ("DELETE 0", ...) is not used.
    await pool.execute(sql, *args)
