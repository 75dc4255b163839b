"""Database connection management with asyncpg and connection pooling.

Only the PostgreSQL entity store talks to this module; the in-memory store
never opens a pool.
"""

import contextlib
import json
from collections.abc import AsyncIterator
from typing import Any

import asyncpg
from attrs import field, frozen
from beartype import beartype

from .config import Settings, get_settings
from .logging_utils import get_logger

logger = get_logger(__name__)


@frozen
class PoolConfig:
    """Immutable pool configuration."""

    min_connections: int = field()
    max_connections: int = field()
    connection_timeout: float = field(default=10.0)
    command_timeout: float = field(default=30.0)
    server_settings: dict[str, str] = field(factory=dict)

    @classmethod
    @beartype
    def from_settings(cls, settings: Settings) -> "PoolConfig":
        return cls(
            min_connections=settings.database_pool_min,
            max_connections=settings.database_pool_max,
            connection_timeout=settings.database_pool_timeout,
            command_timeout=settings.database_command_timeout,
            server_settings={"application_name": settings.app_name},
        )


class Database:
    """asyncpg pool wrapper exposing the handful of calls the store needs."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._pool: asyncpg.Pool | None = None

    @beartype
    async def _init_connection(self, conn: asyncpg.Connection) -> None:
        """Decode JSONB columns straight into Python objects."""
        await conn.set_type_codec(
            "jsonb",
            encoder=lambda v: json.dumps(v),
            decoder=lambda v: json.loads(v),
            schema="pg_catalog",
        )

    @beartype
    async def connect(self) -> None:
        """Create the connection pool."""
        if self._pool is not None:
            return

        config = PoolConfig.from_settings(self._settings)
        self._pool = await asyncpg.create_pool(
            self._settings.database_url,
            min_size=config.min_connections,
            max_size=config.max_connections,
            command_timeout=config.command_timeout,
            server_settings=config.server_settings,
            init=self._init_connection,
        )
        logger.info(
            "Database pool ready (min=%s, max=%s)",
            config.min_connections,
            config.max_connections,
        )

    @beartype
    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            await self._pool.close()
        self._pool = None

    @contextlib.asynccontextmanager
    async def acquire(
        self, *, timeout: float | None = None
    ) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection."""
        if self._pool is None:
            raise RuntimeError("Database not connected")

        timeout = timeout or self._settings.database_pool_timeout
        async with self._pool.acquire(timeout=timeout) as conn:
            yield conn

    @beartype
    async def fetch(self, query: str, *args: Any) -> list[Any]:
        """Execute a query and fetch all results."""
        async with self.acquire() as conn:
            return list(await conn.fetch(query, *args))

    @beartype
    async def fetchrow(self, query: str, *args: Any) -> Any:
        """Execute a query and fetch a single row (or None)."""
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    @beartype
    async def fetchval(self, query: str, *args: Any) -> Any:
        """Execute a query and fetch a single value."""
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args)

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._pool is not None


_database: Database | None = None


@beartype
def get_database() -> Database:
    """Get global database instance."""
    global _database
    if _database is None:
        _database = Database()
    return _database
