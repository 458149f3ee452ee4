from __future__ import annotations

import sqlite3
from typing import Any

import asyncpg
import databases
import databases.core
import httpx
from sqlalchemy.sql import ClauseElement

import config

http_client: httpx.AsyncClient

# `databases` hands back the driver's own exceptions, so these are what a
# duplicate primary key or unique column surfaces as
UNIQUE_VIOLATION_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.exceptions.UniqueViolationError,
    sqlite3.IntegrityError,
)

STORAGE_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    sqlite3.Error,
    OSError,
)


class Database:
    """A thin wrapper over a `databases` connection pool.

    Each asyncio task transparently checks out its own pooled connection, so a
    transaction opened by one synchronization never sees queries issued by
    another.
    """

    def __init__(self, dsn: str) -> None:
        self.database = databases.Database(dsn)

    async def connect(self) -> None:
        await self.database.connect()

    async def disconnect(self) -> None:
        await self.database.disconnect()

    def transaction(self) -> databases.core.Transaction:
        return self.database.transaction()

    async def fetch_all(
        self,
        query: ClauseElement | str,
        values: dict[Any, Any] | None = None,
    ) -> list[dict[str, Any]]:
        rows = await self.database.fetch_all(query, values)
        return [dict(row._mapping) for row in rows]

    async def fetch_one(
        self,
        query: ClauseElement | str,
        values: dict[Any, Any] | None = None,
    ) -> dict[str, Any] | None:
        row = await self.database.fetch_one(query, values)
        if row is None:
            return None

        return dict(row._mapping)

    async def fetch_val(
        self,
        query: ClauseElement | str,
        values: dict[Any, Any] | None = None,
        column: Any = 0,
    ) -> Any:
        val = await self.database.fetch_val(query, values, column)
        return val

    async def execute(
        self,
        query: ClauseElement | str,
        values: dict[Any, Any] | None = None,
    ) -> Any:
        result = await self.database.execute(query, values)
        return result

    async def execute_many(
        self,
        query: ClauseElement | str,
        values: list[Any],
    ) -> None:
        await self.database.execute_many(query, values)


database = Database(config.DB_DSN)
