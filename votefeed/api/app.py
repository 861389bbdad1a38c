"""
VoteFeed - FastAPI Application Factory
Main entry point for the VoteFeed API.

This creates and configures the FastAPI application with:
- The proposal feed, action and page routes
- The EVM read client, connected in the lifespan
- Logging middleware
- Error handlers
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from votefeed import __version__
from votefeed.api.cors import CORS_HEADERS
from votefeed.api.routes import pages, proposal, proposals, sherry, vote
from votefeed.chains import BaseReadClient, ChainClientError, EVMReadClient
from votefeed.config import Settings, get_settings
from votefeed.exceptions import VoteFeedError
from votefeed.monitoring import LoggingContextMiddleware, configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Connects the read client on startup and closes it on shutdown. An
    unreachable RPC does not stop the server: the proposal routes retry the
    connection per request and answer 500 while it is down.
    """
    client: BaseReadClient = app.state.read_client
    target = app.state.contract_target

    logger.info(
        "votefeed_starting",
        network=target.network_name,
        contract=target.address,
        contract_configured=target.is_configured,
        rpc_url=app.state.settings.effective_rpc_url,
    )

    if not client.is_initialized:
        try:
            await client.initialize()
        except ChainClientError as e:
            logger.error("read_client_connect_failed", network=client.network_name, error=str(e))

    try:
        yield
    finally:
        await client.close()
        logger.info("votefeed_stopped")


def create_app(
    settings: Settings | None = None,
    read_client: BaseReadClient | None = None,
    title: str = "VoteFeed",
    description: str = "Public governance voting feed served as social actions",
    docs_url: str | None = "/docs",
    redoc_url: str | None = "/redoc",
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        read_client: Read client to use (defaults to an EVMReadClient for
            the configured network)
        title: API title for documentation
        description: API description
        docs_url: Swagger UI URL (None to disable)
        redoc_url: ReDoc URL (None to disable)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        level=settings.log_level,
        json_output=settings.app_env == "production",
    )

    if settings.app_env == "production":
        docs_url = None
        redoc_url = None

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        docs_url=docs_url,
        redoc_url=redoc_url,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.contract_target = settings.contract_target()
    app.state.read_client = read_client or EVMReadClient(
        settings.network,
        rpc_url=settings.effective_rpc_url,
        timeout_seconds=settings.rpc_timeout_seconds,
    )

    app.add_middleware(LoggingContextMiddleware)

    # ═══════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════
    app.include_router(proposals.router, prefix="/api", tags=["proposals"])
    app.include_router(proposal.router, prefix="/api", tags=["actions"])
    app.include_router(vote.router, prefix="/api", tags=["actions"])
    app.include_router(sherry.router, prefix="/api", tags=["actions"])
    app.include_router(pages.router, tags=["pages"])

    # ═══════════════════════════════════════════════════════════════
    # ERROR HANDLERS
    # ═══════════════════════════════════════════════════════════════
    @app.exception_handler(VoteFeedError)
    async def votefeed_exception_handler(request: Request, exc: VoteFeedError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "request_failed",
            path=str(request.url.path),
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "status_code": exc.status_code,
                "path": str(request.url.path),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Omit 'input' and 'ctx' so submitted values are not echoed back
        sanitized_errors = [
            {
                "loc": error.get("loc", []),
                "type": error.get("type", "unknown"),
                "msg": error.get("msg", "Validation failed"),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={
                "error": "Validation error",
                "details": sanitized_errors,
                "path": str(request.url.path),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            path=str(request.url.path),
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred",
            },
            headers=CORS_HEADERS,
        )

    return app


# Default app for uvicorn
app = create_app()


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
) -> None:
    """
    Run the VoteFeed server.

    For development use:
        python -m votefeed.api.app

    For production use:
        uvicorn votefeed.api.app:app --host 0.0.0.0 --port 3000
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "votefeed.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server(reload=True)
