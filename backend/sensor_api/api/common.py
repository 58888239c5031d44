"""Helpers shared by the record routers."""

import re

from fastapi import HTTPException, Request

from sensor_api.config import Settings
from sensor_api.schemas.data import Data
from sensor_api.schemas.dht22 import DHT22Data
from sensor_api.services.base import RecordService

_ID_PATTERN = re.compile(r"-?[0-9]+")
# Primary keys are 32-bit INTEGER columns.
_ID_MIN, _ID_MAX = -(2**31), 2**31 - 1


# ── Dependencies (wired by the server lifespan, overridable in tests) ──


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_data_service(request: Request) -> RecordService[Data]:
    return request.app.state.data_service


def get_dht22_service(request: Request) -> RecordService[DHT22Data]:
    return request.app.state.dht22_service


# ── Request parsing / error helpers ──


def parse_id(raw: str) -> int:
    """Parse a path identifier; anything but a base-10 integer is a 400."""
    if not _ID_PATTERN.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid ID format")
    value = int(raw)
    if not _ID_MIN <= value <= _ID_MAX:
        raise HTTPException(status_code=400, detail="Invalid ID format")
    return value


def internal_error(action: str, exc: Exception, settings: Settings) -> HTTPException:
    """500 response for a failed service call.

    The internal error text is only exposed in DEBUG (development) mode.
    """
    if settings.DEBUG:
        return HTTPException(status_code=500, detail=f"Failed to {action}: {exc}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


def not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="")


def resolve_page(page: int | None, rows_per_page: int | None, settings: Settings) -> tuple[int, int]:
    return (
        page if page is not None else settings.DEFAULT_PAGE,
        rows_per_page if rows_per_page is not None else settings.DEFAULT_ROWS_PER_PAGE,
    )
