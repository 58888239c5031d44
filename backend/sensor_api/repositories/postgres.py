"""PostgreSQL repositories built on asyncpg prepared statements.

Each repository holds one connection from the shared pool for its whole
lifetime, recreates its table on open() and prepares one statement per
CRUD verb on that connection. close() releases the connection (and with it
the prepared statements) back to the pool.
"""

import asyncio
import logging
from typing import Any

import asyncpg
from sqlalchemy import Table
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from sensor_api.errors import (
    InvalidPaginationError,
    RepositoryClosedError,
    RepositoryInitError,
)
from sensor_api.models.data import DataRecord
from sensor_api.models.dht22_data import DHT22Record
from sensor_api.repositories.base import RecordRepository, RecordT
from sensor_api.schemas.data import Data
from sensor_api.schemas.dht22 import DHT22Data

logger = logging.getLogger(__name__)

# LIMIT and OFFSET are bound as int8 parameters.
MAX_BIGINT = 2**63 - 1


def page_offset(page: int, rows_per_page: int) -> int:
    """Row offset of a 1-based page.

    Rejects page < 1, rows_per_page < 1 and values the store cannot bind.
    """
    if page < 1 or rows_per_page < 1:
        raise InvalidPaginationError(
            f"page and rows_per_page must be >= 1 (got page={page}, rows_per_page={rows_per_page})"
        )
    offset = rows_per_page * (page - 1)
    if rows_per_page > MAX_BIGINT or offset > MAX_BIGINT:
        raise InvalidPaginationError(
            f"page={page}, rows_per_page={rows_per_page} is beyond the last addressable row"
        )
    return offset


class PostgresRepository(RecordRepository[RecordT]):
    """Generic CRUD repository; subclasses bind a pydantic schema to a table."""

    record_type: type[RecordT]
    table: Table

    def __init__(self, pool: asyncpg.Pool, command_timeout: float | None = None):
        self._pool = pool
        self._timeout = command_timeout
        self._conn: asyncpg.Connection | None = None
        self._statements: dict[str, Any] = {}
        # One asyncpg connection cannot run two statements at the same time.
        self._lock = asyncio.Lock()

    @property
    def columns(self) -> list[str]:
        """Column names in statement order, without the primary key."""
        return [c.name for c in self.table.columns if not c.primary_key]

    def build_queries(self) -> dict[str, str]:
        name = self.table.name
        cols = self.columns
        selected = ", ".join(["id", *cols])
        placeholders = ", ".join(f"${i}" for i in range(1, len(cols) + 1))
        assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(cols, start=1))
        return {
            "create": f"INSERT INTO {name} ({', '.join(cols)}) VALUES ({placeholders}) RETURNING id",
            "read": f"SELECT {selected} FROM {name} WHERE id = $1",
            "read_many": f"SELECT {selected} FROM {name} LIMIT $1 OFFSET $2",
            "update": f"UPDATE {name} SET {assignments} WHERE id = ${len(cols) + 1} RETURNING id",
            "delete": f"DELETE FROM {name} WHERE id = $1 RETURNING id",
        }

    def create_table_ddl(self) -> str:
        return str(CreateTable(self.table).compile(dialect=postgresql.dialect()))

    @property
    def closed(self) -> bool:
        return self._conn is None

    async def open(self) -> "PostgresRepository[RecordT]":
        """Recreate the table and prepare the CRUD statements.

        Destructive: any existing table with the same name is dropped.
        """
        if self._conn is not None:
            return self
        name = self.table.name
        conn = None
        try:
            conn = await self._pool.acquire()
            await conn.execute(f"DROP TABLE IF EXISTS {name}")
            await conn.execute(self.create_table_ddl())
            statements = {}
            for key, query in self.build_queries().items():
                statements[key] = await conn.prepare(query)
        except BaseException as exc:
            # Cancellation included: the connection must go back to the pool.
            if conn is not None:
                await self._pool.release(conn)
            if isinstance(exc, Exception):
                raise RepositoryInitError(f"Failed to initialize repository for table {name}: {exc}") from exc
            raise

        self._conn = conn
        self._statements = statements
        logger.info("Table %s recreated, %d statements prepared", name, len(statements))
        return self

    async def close(self) -> None:
        """Release the statements and the connection. Safe to call twice."""
        if self._conn is None:
            return
        # Waits for a running statement to finish before the connection goes.
        async with self._lock:
            conn, self._conn = self._conn, None
            self._statements = {}
            await self._pool.release(conn)
        logger.info("Repository for table %s closed", self.table.name)

    async def _run(self, key: str, method: str, *args):
        async with self._lock:
            if self._conn is None:
                raise RepositoryClosedError(f"Repository for table {self.table.name} is closed")
            statement = self._statements[key]
            return await getattr(statement, method)(*args, timeout=self._timeout)

    def _values(self, record: RecordT) -> list:
        return [getattr(record, c) for c in self.columns]

    def _to_record(self, row) -> RecordT:
        return self.record_type.model_validate(dict(row))

    async def create(self, record: RecordT) -> None:
        record.id = await self._run("create", "fetchval", *self._values(record))

    async def read_one(self, record_id: int) -> RecordT | None:
        row = await self._run("read", "fetchrow", record_id)
        if row is None:
            return None
        return self._to_record(row)

    async def read_many(self, page: int, rows_per_page: int) -> list[RecordT]:
        offset = page_offset(page, rows_per_page)
        rows = await self._run("read_many", "fetch", rows_per_page, offset)
        return [self._to_record(r) for r in rows]

    async def update(self, record: RecordT) -> int:
        rows = await self._run("update", "fetch", *self._values(record), record.id)
        return len(rows)

    async def delete(self, record_id: int) -> int:
        rows = await self._run("delete", "fetch", record_id)
        return len(rows)


class PostgresDataRepository(PostgresRepository[Data]):
    record_type = Data
    table = DataRecord.__table__


class PostgresDHT22Repository(PostgresRepository[DHT22Data]):
    record_type = DHT22Data
    table = DHT22Record.__table__
