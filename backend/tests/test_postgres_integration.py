"""
Integration tests against a real PostgreSQL.

Set TEST_DATABASE_URL to run them. The data and dht22_data tables in that
database are dropped and recreated.
"""

import asyncio
import os

import asyncpg
import pytest

from sensor_api.repositories.postgres import PostgresDHT22Repository
from sensor_api.schemas.dht22 import DHT22Data

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not TEST_DATABASE_URL, reason="TEST_DATABASE_URL is not set"
)


def run_with_repository(scenario):
    async def main():
        pool = await asyncpg.create_pool(TEST_DATABASE_URL, min_size=1, max_size=2)
        try:
            async with PostgresDHT22Repository(pool) as repo:
                return await scenario(repo)
        finally:
            await pool.close()

    return asyncio.run(main())


def reading(name="Test Sensor"):
    return DHT22Data(
        device_name=name,
        temperature=25.5,
        humidity=60.0,
        date_time="2024-12-22T12:00:00Z",
    )


def test_create_then_read_round_trip():
    async def scenario(repo):
        record = reading()
        await repo.create(record)
        return record, await repo.read_one(record.id)

    created, fetched = run_with_repository(scenario)

    assert created.id > 0
    assert fetched == created


def test_missing_id_update_delete_and_read():
    async def scenario(repo):
        ghost = reading()
        ghost.id = 999
        return (
            await repo.update(ghost),
            await repo.delete(999),
            await repo.read_one(999),
        )

    assert run_with_repository(scenario) == (0, 0, None)


def test_read_many_returns_both_rows():
    async def scenario(repo):
        await repo.create(reading("one"))
        await repo.create(reading("two"))
        return await repo.read_many(1, 10)

    rows = run_with_repository(scenario)

    assert sorted(r.device_name for r in rows) == ["one", "two"]


def test_long_strings_round_trip():
    async def scenario(repo):
        record = reading("x" * 200)
        record.date_time = "2024-12-22T12:00:00.123456789+00:00 (recorded by gateway in hall 7, rack 3)"
        await repo.create(record)
        return record, await repo.read_one(record.id)

    created, fetched = run_with_repository(scenario)

    assert len(created.date_time) > 64
    assert fetched == created
