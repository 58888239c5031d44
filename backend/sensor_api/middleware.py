"""HTTP middleware chain.

Each middleware is a plain ``async def mw(request, call_next)`` function.
chain_middleware() installs them so that the first one given is the
outermost, i.e. requests pass through them in registration order.
"""

import logging
import time
from typing import Awaitable, Callable

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.security import HTTPBasic
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
HTTPMiddleware = Callable[[Request, CallNext], Awaitable[Response]]

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"

# auto_error=False: a missing header yields None instead of a 401.
_basic_auth = HTTPBasic(auto_error=False)


async def basic_authentication_middleware(request: Request, call_next: CallNext) -> Response:
    """Pass-through authentication.

    Records the Basic-auth user name (if any) on request.state.user; no
    request is ever rejected here.
    """
    request.state.user = None
    try:
        credentials = await _basic_auth(request)
    except HTTPException:
        logger.debug("Ignoring malformed Basic credentials")
    else:
        if credentials is not None:
            request.state.user = credentials.username
    return await call_next(request)


async def common_middleware(request: Request, call_next: CallNext) -> Response:
    """Request logging and headers common to every response."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Content-Type-Options"] = "nosniff"
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


async def preflight_middleware(request: Request, call_next: CallNext) -> Response:
    """Answer any OPTIONS request that CORSMiddleware did not already handle."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers={"Allow": ALLOWED_METHODS})
    return await call_next(request)


def chain_middleware(app: FastAPI, *middlewares: HTTPMiddleware) -> FastAPI:
    # Starlette makes the last added middleware the outermost one.
    for middleware in reversed(middlewares):
        app.add_middleware(BaseHTTPMiddleware, dispatch=middleware)
    return app
