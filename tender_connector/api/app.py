"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tender_connector.config.models import ServerConfig
from tender_connector.drivers.exceptions import DriverError
from tender_connector.logging import get_logger
from tender_connector.pipeline.runner import SearchService
from tender_connector.tools.exceptions import ToolArgumentsError, UnknownToolError

from .routes import router

logger = get_logger(__name__, component="api")


def create_app(service: SearchService, server_config: Optional[ServerConfig] = None) -> FastAPI:
    """
    Build the HTTP application around a shared search service.

    Args:
        service: Search service used by every request
        server_config: Server settings (defaults to ServerConfig())

    Returns:
        Configured FastAPI application
    """
    server_config = server_config or ServerConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        service.close()

    app = FastAPI(
        lifespan=lifespan,
        title="Tender Connector",
        description="Procurement listing search over public contracting sources.",
        version="0.1.0",
    )
    app.state.service = service
    app.state.heartbeat_seconds = server_config.heartbeat_seconds

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DriverError)
    async def driver_error_handler(request: Request, exc: DriverError) -> JSONResponse:
        logger.error(
            f"Upstream source failed: {exc}",
            extra={
                "event": "api.request.upstream_error",
                "path": request.url.path,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=502, content={"error": str(exc), "hint": exc.hint})

    @app.exception_handler(UnknownToolError)
    async def unknown_tool_handler(request: Request, exc: UnknownToolError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(ToolArgumentsError)
    async def arguments_error_handler(request: Request, exc: ToolArgumentsError) -> JSONResponse:
        logger.warning(
            f"Rejected request arguments: {exc}",
            extra={"event": "api.request.invalid", "path": request.url.path},
        )
        return JSONResponse(status_code=422, content={"error": str(exc), "details": exc.errors})

    app.include_router(router)
    return app
