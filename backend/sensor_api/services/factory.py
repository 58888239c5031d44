"""Service factory: picks a backing store and wires repository -> service."""

import logging
from contextlib import AsyncExitStack
from enum import Enum

import asyncpg

from sensor_api.config import Settings
from sensor_api.errors import ServiceConfigurationError
from sensor_api.repositories.postgres import (
    PostgresDataRepository,
    PostgresDHT22Repository,
)
from sensor_api.services.data import DataService
from sensor_api.services.dht22 import DHT22Service

logger = logging.getLogger(__name__)


class DataServiceType(str, Enum):
    POSTGRES = "postgres"


class DHT22ServiceType(str, Enum):
    POSTGRES = "postgres"


class ServiceFactory:
    """
    Builds services on top of the shared connection pool.

    Every repository opened here is registered on exit_stack, so closing
    the stack releases all statements and connections in reverse order.
    """

    def __init__(self, pool: asyncpg.Pool, exit_stack: AsyncExitStack, settings: Settings):
        self.pool = pool
        self.exit_stack = exit_stack
        self.settings = settings

    async def create_data_service(self, service_type: DataServiceType) -> DataService:
        if service_type == DataServiceType.POSTGRES:
            repo = PostgresDataRepository(self.pool, self.settings.DB_COMMAND_TIMEOUT)
            await self.exit_stack.enter_async_context(repo)
            logger.info("Data service ready (%s)", service_type.value)
            return DataService(repo)
        raise ServiceConfigurationError(f"Invalid data service type: {service_type!r}")

    async def create_dht22_service(self, service_type: DHT22ServiceType) -> DHT22Service:
        if service_type == DHT22ServiceType.POSTGRES:
            repo = PostgresDHT22Repository(self.pool, self.settings.DB_COMMAND_TIMEOUT)
            await self.exit_stack.enter_async_context(repo)
            logger.info("DHT22 service ready (%s)", service_type.value)
            return DHT22Service(repo)
        raise ServiceConfigurationError(f"Invalid DHT22 service type: {service_type!r}")
