"""
FastAPI application for the payment service.

Wires together:
- payments and monitoring routers
- domain error handlers (api.errors)
- request-scoped log context with X-Request-ID
- CORS
- payment table bootstrap in the lifespan (database store only)
"""
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from payment_service import __version__
from payment_service.config import get_settings
from payment_service.infrastructure.database import close_db, init_db
from payment_service.monitoring.logging import setup_logging

from .errors import register_exception_handlers
from .routes import monitoring_router, payment_router

setup_logging()
logger = structlog.get_logger(__name__)

settings = get_settings()

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, Any]:
    logger.info(
        "application_startup",
        version=__version__,
        store_backend=settings.payment_store_backend,
        provider_url=settings.payment_provider_url,
    )

    if settings.uses_database:
        try:
            await init_db()
        except Exception as e:
            logger.error("database_initialization_failed", error=str(e))
            raise
        logger.info("database_initialized")

    try:
        yield
    finally:
        if settings.uses_database:
            await close_db()
        logger.info("application_shutdown")


app = FastAPI(
    title="Payment Service",
    description=(
        "Initiates payments against an external provider and reconciles "
        "their status on demand."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next: Any) -> Response:
    """
    Bind a request id and route info to every log line of the request.

    A caller-supplied X-Request-ID is reused so traces can span services;
    otherwise a new one is generated. The id is echoed on the response.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            "request_failed",
            error=str(e),
            duration_seconds=round(time.perf_counter() - started, 4),
        )
        raise

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_seconds=round(time.perf_counter() - started, 4),
    )
    return response


register_exception_handlers(app)

app.include_router(payment_router)
app.include_router(monitoring_router)


@app.get("/", tags=["root"])
async def root() -> dict[str, Any]:
    return {
        "service": settings.app_name,
        "version": __version__,
        "status": "operational",
        "environment": settings.app_env,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the API with uvicorn (console script `payment-service`)."""
    import uvicorn

    uvicorn.run(
        "payment_service.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.api_workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
