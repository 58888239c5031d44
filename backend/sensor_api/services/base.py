"""Service layer: the seam between HTTP handlers and repositories."""

from abc import ABC, abstractmethod
from typing import Generic

from sensor_api.repositories.base import RecordRepository, RecordT


class RecordService(ABC, Generic[RecordT]):
    """Operations the handlers need for one record type."""

    @abstractmethod
    async def create(self, record: RecordT) -> None: ...

    @abstractmethod
    async def read_one(self, record_id: int) -> RecordT | None: ...

    @abstractmethod
    async def read_many(self, page: int, rows_per_page: int) -> list[RecordT]: ...

    @abstractmethod
    async def update(self, record: RecordT) -> int: ...

    @abstractmethod
    async def delete(self, record_id: int) -> int: ...


class RepositoryService(RecordService[RecordT]):
    """Forwards every call to a repository; errors propagate unchanged."""

    def __init__(self, repository: RecordRepository[RecordT]):
        self.repository = repository

    async def create(self, record: RecordT) -> None:
        await self.repository.create(record)

    async def read_one(self, record_id: int) -> RecordT | None:
        return await self.repository.read_one(record_id)

    async def read_many(self, page: int, rows_per_page: int) -> list[RecordT]:
        return await self.repository.read_many(page, rows_per_page)

    async def update(self, record: RecordT) -> int:
        return await self.repository.update(record)

    async def delete(self, record_id: int) -> int:
        return await self.repository.delete(record_id)
