from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordRepository(ABC, Generic[RecordT]):
    """
    Persistence operations for one record type.

    Implementations own whatever store resources they need and release them
    in close(). They can be used as async context managers:

        async with PostgresDHT22Repository(pool) as repo:
            await repo.create(reading)
    """

    async def open(self) -> "RecordRepository[RecordT]":
        return self

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @abstractmethod
    async def create(self, record: RecordT) -> None:
        """Persist the record and set record.id to the store-assigned value."""

    @abstractmethod
    async def read_one(self, record_id: int) -> RecordT | None:
        """Return the record, or None when no row has that id."""

    @abstractmethod
    async def read_many(self, page: int, rows_per_page: int) -> list[RecordT]:
        """Return at most rows_per_page records of the 1-based page."""

    @abstractmethod
    async def update(self, record: RecordT) -> int:
        """Overwrite every field of the row with record.id. Returns rows affected."""

    @abstractmethod
    async def delete(self, record_id: int) -> int:
        """Delete the row with record_id. Returns rows affected."""
