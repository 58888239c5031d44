"""Application assembly: routes, middleware, error rendering, lifecycle."""

import logging
from contextlib import AsyncExitStack, asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sensor_api.api.data import router as data_router
from sensor_api.api.dht22 import router as dht22_router
from sensor_api.config import Settings, get_settings
from sensor_api.database import close_pool, create_pool
from sensor_api.middleware import (
    basic_authentication_middleware,
    chain_middleware,
    common_middleware,
    preflight_middleware,
)
from sensor_api.services.factory import (
    DataServiceType,
    DHT22ServiceType,
    ServiceFactory,
)

logger = logging.getLogger(__name__)

# ── Error rendering: every error body is plain text ──


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        exc.detail or "",
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    in_body = any(e["loc"] and e["loc"][0] == "body" for e in errors)
    reasons = "; ".join(
        f"{'.'.join(str(p) for p in e['loc'][1:]) or e['loc'][0]}: {e['msg']}"
        for e in errors
    )
    prefix = "Invalid request body" if in_body else "Invalid request parameters"
    return PlainTextResponse(f"{prefix}: {reasons}", status_code=400)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Usable directly as a uvicorn factory:
        uvicorn --factory sensor_api.server:create_app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the pool and repositories; close them in reverse order on shutdown."""
        async with AsyncExitStack() as stack:
            pool = await create_pool(settings)
            stack.push_async_callback(close_pool, pool)
            factory = ServiceFactory(pool, stack, settings)
            app.state.data_service = await factory.create_data_service(DataServiceType.POSTGRES)
            app.state.dht22_service = await factory.create_dht22_service(DHT22ServiceType.POSTGRES)
            yield
            logger.info("Releasing database resources")

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    chain_middleware(
        app,
        basic_authentication_middleware,
        common_middleware,
        preflight_middleware,
    )
    # CORS middleware (outermost, so browser preflights never reach auth)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    app.include_router(data_router)
    app.include_router(dht22_router)
    return app


class Server:
    """Owns the listener; shutdown() drains in-flight requests before exiting."""

    def __init__(self, settings: Settings, app: FastAPI | None = None):
        self.settings = settings
        self.app = app or create_app(settings)
        self.http_server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=settings.HOST,
                port=settings.PORT,
                timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
                log_config=None,
            )
        )

    async def listen_and_serve(self) -> None:
        logger.info("Listening on %s:%d", self.settings.HOST, self.settings.PORT)
        await self.http_server.serve()

    async def shutdown(self) -> None:
        logger.info("Gracefully shutting down server...")
        self.http_server.should_exit = True
