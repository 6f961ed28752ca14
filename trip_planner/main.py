"""
Trip Planner API application.

Run locally with ``python -m trip_planner.main`` (port 3000, the port the
web client proxies to).
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from trip_planner.api.middleware import RateLimitMiddleware, RequestIdMiddleware
from trip_planner.api.v1 import router as api_router
from trip_planner.config import Settings, get_settings
from trip_planner.database import close_db, engine, init_db
from trip_planner.logging_config import configure_logging, get_logger
from trip_planner.schemas.common import HealthResponse

logger = get_logger(__name__)

DESCRIPTION = """
Itinerary, a three-column task board, a budget and stays for one trip.

Everything except login and logout needs the session cookie, and each
record is visible to its owner only.
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    settings: Settings = app.state.settings
    configure_logging(settings)
    await init_db()
    logger.info("%s %s started", settings.project_name, settings.version)
    yield
    await close_db()
    logger.info("%s stopped", settings.project_name)


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 listing each offending field as ``body.field``."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "errors": errors},
    )


async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled, ordering precondition violations included."""
    logger.exception("Unhandled %s", type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "request_id": _request_id(request)},
    )


async def health(request: Request) -> HealthResponse:
    settings: Settings = request.app.state.settings
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database")
        return HealthResponse(status="degraded", version=settings.version, database="unavailable")
    return HealthResponse(status="ok", version=settings.version, database="connected")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.project_name,
        description=DESCRIPTION,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )
    app.state.settings = settings

    # Last added runs first: CORS wraps everything, so 429s carry CORS headers too
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    app.add_exception_handler(HTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)
    app.add_exception_handler(Exception, unexpected_error)

    app.add_api_route("/health", health, methods=["GET"], response_model=HealthResponse, tags=["Health"])
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("trip_planner.main:app", host="0.0.0.0", port=3000, reload=get_settings().debug)
