"""
Tool Wear Monitor API

A FastAPI service tracking wear of injection-mold tools: production
counters, wear classification, swaps, scrap and dashboard aggregation.

Main application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import ProgrammingError
from starlette.middleware.gzip import GZipMiddleware

from toolwear import __version__
from toolwear.api import routes_dashboard, routes_export, routes_health, routes_tools
from toolwear.core import database
from toolwear.core.config import get_settings
from toolwear.core.database import Base, close_db, get_db_context, init_db
from toolwear.core.errors import ConflictError, InvalidInputError, NotFoundError, ToolWearError
from toolwear.core.logging import get_logger, setup_logging
from toolwear.core.middleware import RequestLoggingMiddleware
from toolwear.services.seed import seed_demo_data

# Import all models to ensure they're registered with Base
from toolwear.models import MoldComment, ProductionEntry, ScrapEntry, SwapEvent, Tool  # noqa: F401

# Initialize application settings
settings = get_settings()

# Setup structured logging
setup_logging(
    settings.log_level,
    settings.log_format,
    log_dir=settings.log_dir,
    max_bytes=settings.log_max_bytes,
    backup_count=settings.log_backup_count,
    cache_loggers=settings.environment != "testing",
)

logger = get_logger(__name__)

ERROR_STATUS = {
    InvalidInputError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Database initialization and schema creation
    - Optional demo data
    - Connection pool cleanup
    """
    if not settings.database_url.startswith("postgresql") and not settings.is_sqlite:
        raise ValueError(
            f"Only PostgreSQL or SQLite databases are supported, got: {settings.database_url[:30]}..."
        )

    await init_db()

    async with database.engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created/verified")
        except ProgrammingError as e:
            # Enum types created by Alembic make create_all trip on PostgreSQL
            if "already exists" in str(e):
                logger.info("Database objects already exist", detail=str(e).splitlines()[0])
            else:
                raise

    if settings.seed_demo_data:
        async with get_db_context() as db:
            await seed_demo_data(db, settings.tzinfo)

    logger.info(
        "Tool Wear Monitor API starting",
        host=settings.api_host,
        port=settings.api_port,
        database=settings.database_url.split("@")[-1],  # Hide credentials
        plant_timezone=settings.plant_timezone,
        cors_origins=settings.cors_origins,
    )

    yield

    await close_db()
    logger.info("Tool Wear Monitor API shut down")


# Create FastAPI application
app = FastAPI(
    title="Tool Wear Monitor API",
    description="""
    ## Tool Wear Monitoring

    Tracks the wear of tools mounted on production molds.

    ### Key Features:
    - **Tools**: register, retire and delete tools per mold
    - **Production**: record produced pieces; wear is reclassified on every entry
    - **Wear condition**: OK below 70% of useful life, WARN ("Atenção!") from 70%,
      REPLACE ("Trocar Ferramenta (TF)") from 80%
    - **Swaps**: reset a tool and keep an immutable swap history
    - **Scrap**: monthly rejected units per mold (a new count replaces the old one)
    - **Dashboard**: KPIs and chart data recomputed on every request

    Dates are exchanged as DD/MM/YYYY and months as MM/YYYY, in plant local time.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Request-ID"],
)

app.add_middleware(GZipMiddleware, minimum_size=1024)

# Request logging and timing
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ToolWearError)
async def tool_wear_exception_handler(request: Request, exc: ToolWearError) -> JSONResponse:
    """Map engine failures onto 400 / 404 / 409."""
    status_code = next(
        (code for error_class, code in ERROR_STATUS.items() if isinstance(exc, error_class)),
        400,
    )
    logger.info(
        "Request rejected",
        status_code=status_code,
        code=exc.code,
        detail=exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": getattr(request.state, "request_id", "unknown"),
        }
    )


# Include API routers
app.include_router(
    routes_health.router,
    prefix="/healthz",
    tags=["Health Check"]
)

app.include_router(
    routes_export.router,
    prefix="/api/tools",
    tags=["Export"]
)

app.include_router(
    routes_tools.router,
    prefix="/api/tools",
    tags=["Tools"]
)

app.include_router(
    routes_dashboard.router,
    prefix="/api/dashboard",
    tags=["Dashboard"]
)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Tool Wear Monitor API",
        "version": __version__,
        "docs": "/docs",
        "health": "/healthz",
    }


if __name__ == "__main__":
    uvicorn.run(
        "toolwear.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
