"""API routes for generic device records."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from sensor_api.api.common import (
    get_app_settings,
    get_data_service,
    internal_error,
    not_found,
    parse_id,
    resolve_page,
)
from sensor_api.config import Settings
from sensor_api.errors import InvalidPaginationError
from sensor_api.schemas.data import Data
from sensor_api.services.base import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/data", tags=["Data"])


# ── POST /data ─────────────────────────────────────


@router.post(
    "",
    status_code=201,
    response_model=Data,
    summary="Store a data record",
)
async def create_data(
    data: Data,
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    """Persist the record and return it with its assigned id."""
    try:
        await service.create(data)
    except Exception as exc:
        logger.exception("Creating data failed")
        raise internal_error("create data", exc, settings)
    return data


# ── GET /data ──────────────────────────────────────


@router.get(
    "",
    response_model=list[Data],
    summary="List data records (paginated)",
)
async def list_data(
    page: int | None = Query(default=None, ge=1, description="1-based page number"),
    rows_per_page: int | None = Query(default=None, ge=1, description="Page size"),
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    page, rows_per_page = resolve_page(page, rows_per_page, settings)
    try:
        return await service.read_many(page, rows_per_page)
    except InvalidPaginationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("Listing data failed (page=%d)", page)
        raise internal_error("fetch data", exc, settings)


# ── GET /data/{id} ─────────────────────────────────


@router.get(
    "/{record_id}",
    response_model=Data,
    summary="Fetch one data record",
)
async def get_data(
    record_id: str,
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    """404 with an empty body when no record has that id."""
    data_id = parse_id(record_id)
    try:
        data = await service.read_one(data_id)
    except Exception as exc:
        logger.exception("Fetching data %d failed", data_id)
        raise internal_error("fetch data", exc, settings)
    if data is None:
        raise not_found()
    return data


# ── PUT /data and /data/{id} ──────────────────────


async def _update(data: Data, service: RecordService[Data], settings: Settings):
    try:
        affected = await service.update(data)
    except Exception as exc:
        logger.exception("Updating data %d failed", data.id)
        raise internal_error("update data", exc, settings)
    if affected == 0:
        logger.info("Update matched no data row with id %d", data.id)
    return PlainTextResponse("Data updated successfully")


@router.put("", summary="Update a data record (id taken from the body)")
async def update_data(
    data: Data,
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    return await _update(data, service, settings)


@router.put("/{record_id}", summary="Update a data record (id taken from the path)")
async def update_data_by_id(
    record_id: str,
    data: Data,
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    data.id = parse_id(record_id)
    return await _update(data, service, settings)


# ── DELETE /data/{id} ──────────────────────────────


@router.delete("/{record_id}", summary="Delete a data record")
async def delete_data(
    record_id: str,
    service: RecordService[Data] = Depends(get_data_service),
    settings: Settings = Depends(get_app_settings),
):
    data_id = parse_id(record_id)
    try:
        affected = await service.delete(data_id)
    except Exception as exc:
        logger.exception("Deleting data %d failed", data_id)
        raise internal_error("delete data", exc, settings)
    if affected == 0:
        logger.info("Delete matched no data row with id %d", data_id)
    return PlainTextResponse("Data deleted successfully")
