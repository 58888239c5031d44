"""API routes for DHT22 sensor readings."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from sensor_api.api.common import (
    get_app_settings,
    get_dht22_service,
    internal_error,
    not_found,
    parse_id,
    resolve_page,
)
from sensor_api.config import Settings
from sensor_api.errors import InvalidPaginationError
from sensor_api.schemas.dht22 import DHT22Data
from sensor_api.services.base import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dht22", tags=["DHT22"])


# ── POST /dht22 ─────────────────────────────────────


@router.post(
    "",
    status_code=201,
    response_model=DHT22Data,
    summary="Store a DHT22 reading",
)
async def create_dht22(
    data: DHT22Data,
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    """Persist the reading and return it with its assigned id."""
    try:
        await service.create(data)
    except Exception as exc:
        logger.exception("Creating DHT22 data failed")
        raise internal_error("create DHT22 data", exc, settings)
    return data


# ── GET /dht22 ──────────────────────────────────────


@router.get(
    "",
    response_model=list[DHT22Data],
    summary="List DHT22 readings (paginated)",
)
async def list_dht22(
    page: int | None = Query(default=None, ge=1, description="1-based page number"),
    rows_per_page: int | None = Query(default=None, ge=1, description="Page size"),
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    page, rows_per_page = resolve_page(page, rows_per_page, settings)
    try:
        return await service.read_many(page, rows_per_page)
    except InvalidPaginationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("Listing DHT22 data failed (page=%d)", page)
        raise internal_error("fetch DHT22 data", exc, settings)


# ── GET /dht22/{id} ─────────────────────────────────


@router.get(
    "/{record_id}",
    response_model=DHT22Data,
    summary="Fetch one DHT22 reading",
)
async def get_dht22(
    record_id: str,
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    """404 with an empty body when no reading has that id."""
    reading_id = parse_id(record_id)
    try:
        data = await service.read_one(reading_id)
    except Exception as exc:
        logger.exception("Fetching DHT22 data %d failed", reading_id)
        raise internal_error("fetch DHT22 data", exc, settings)
    if data is None:
        raise not_found()
    return data


# ── PUT /dht22 and /dht22/{id} ──────────────────────


async def _update(data: DHT22Data, service: RecordService[DHT22Data], settings: Settings):
    try:
        affected = await service.update(data)
    except Exception as exc:
        logger.exception("Updating DHT22 data %d failed", data.id)
        raise internal_error("update DHT22 data", exc, settings)
    if affected == 0:
        logger.info("Update matched no DHT22 row with id %d", data.id)
    return PlainTextResponse("DHT22 data updated successfully")


@router.put("", summary="Update a DHT22 reading (id taken from the body)")
async def update_dht22(
    data: DHT22Data,
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    return await _update(data, service, settings)


@router.put("/{record_id}", summary="Update a DHT22 reading (id taken from the path)")
async def update_dht22_by_id(
    record_id: str,
    data: DHT22Data,
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    data.id = parse_id(record_id)
    return await _update(data, service, settings)


# ── DELETE /dht22/{id} ──────────────────────────────


@router.delete("/{record_id}", summary="Delete a DHT22 reading")
async def delete_dht22(
    record_id: str,
    service: RecordService[DHT22Data] = Depends(get_dht22_service),
    settings: Settings = Depends(get_app_settings),
):
    reading_id = parse_id(record_id)
    try:
        affected = await service.delete(reading_id)
    except Exception as exc:
        logger.exception("Deleting DHT22 data %d failed", reading_id)
        raise internal_error("delete DHT22 data", exc, settings)
    if affected == 0:
        logger.info("Delete matched no DHT22 row with id %d", reading_id)
    return PlainTextResponse("DHT22 data deleted successfully")
