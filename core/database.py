"""
MongoDB handle cache. One client per process, built on first use and reused.
Routes receive the handle through core.dependencies.DatabaseDep.
"""

import asyncio
from functools import lru_cache
from typing import Any, Callable

from pymongo import AsyncMongoClient

from core.config import get_settings
from core.errors import DatabaseConfigError
from utils.logging import get_logger

logger = get_logger(__name__)


class DatabaseConnection:
    """
    Lazily connected database handle.
    Concurrent first calls share one connect: the lock is taken only while
    nothing is cached, and the cache is re-checked under it.
    """

    def __init__(
        self,
        url: str,
        db_name: str,
        client_factory: Callable[[str], Any] = AsyncMongoClient,
    ) -> None:
        self.url = url
        self.db_name = db_name
        self._client_factory = client_factory
        self._client: Any = None
        self._database: Any = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def connect(self) -> Any:
        """Return the cached database, connecting first if needed."""
        if self._database is not None:
            return self._database
        async with self._lock:
            if self._database is not None:
                return self._database
            if not self.url:
                raise DatabaseConfigError("Missing MONGODB_URL")
            client = self._client_factory(self.url)
            try:
                await client.admin.command("ping")
            except Exception:
                logger.exception("database_connect_failed", extra={"db_name": self.db_name})
                await client.close()
                raise
            self._client = client
            self._database = client[self.db_name]
            logger.info("database_connected", extra={"db_name": self.db_name})
        return self._database

    async def close(self) -> None:
        """Close the client and clear the cache; a later connect() starts over."""
        async with self._lock:
            if self._client is None:
                return
            await self._client.close()
            self._client = None
            self._database = None
            logger.info("database_closed", extra={"db_name": self.db_name})


@lru_cache
def get_database_connection() -> DatabaseConnection:
    """Process-wide connection built from settings."""
    settings = get_settings()
    return DatabaseConnection(settings.MONGODB_URL, settings.MONGODB_DB_NAME)
