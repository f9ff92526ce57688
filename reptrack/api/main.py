"""
FastAPI application for REPTrack.

Provides REST API endpoints for:
- Exchange rates (view, override, reset, live refresh, conversion)
- Portfolio dashboard figures and per-property valuations
- Tax estimates
- Lease expiry alerts
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reptrack import __version__
from reptrack.api.dependencies import get_app_config
from reptrack.api.routes import leases, portfolio, rates, tax
from reptrack.db.connection import check_connection, get_db_manager, init_database
from reptrack.utils.error_utils import (
    LiveRateFetchExhaustedError,
    OwnershipValidationError,
    PortfolioTrackerError,
    RecordNotFoundError,
)

logger = logging.getLogger("reptrack")

# Most specific first
_ERROR_STATUS = (
    (LiveRateFetchExhaustedError, 502),
    (RecordNotFoundError, 404),
    (OwnershipValidationError, 422),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the schema when running against a database and releases the pool on shutdown.
    """
    config = get_app_config()
    if config.uses_database:
        logger.info("Initializing database connection...")
        init_database()
    yield
    if config.uses_database:
        logger.info("Shutting down...")
        get_db_manager().dispose()


# Create FastAPI application
app = FastAPI(
    title="REPTrack API",
    description="Real-estate portfolio tracking: multi-currency valuation, cash flow, tax and lease alerts",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_config().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortfolioTrackerError)
async def portfolio_error_handler(request: Request, exc: PortfolioTrackerError):
    """Map domain errors to status codes; anything unrecognized is a 500."""
    status_code = next((code for error, code in _ERROR_STATUS if isinstance(exc, error)), 500)
    log = logger.warning if status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.message,
            "detail": exc.details if status_code < 500 else None,
            "type": type(exc).__name__,
        },
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )


# Health check endpoint
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """API health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "reptrack-api",
    }


@app.get("/health/db")
async def health_check_db() -> Dict[str, Any]:
    """Check database connectivity and latency; skipped when serving demo data."""
    if not get_app_config().uses_database:
        return {"status": "skipped", "data_source": get_app_config().data_source}
    start = time.time()
    healthy = check_connection()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "latency_ms": round((time.time() - start) * 1000, 2),
    }


# Include routers
app.include_router(rates.router, prefix="/api/rates", tags=["Exchange Rates"])
app.include_router(portfolio.router, prefix="/api/portfolio", tags=["Portfolio"])
app.include_router(tax.router, prefix="/api/tax", tags=["Tax"])
app.include_router(leases.router, prefix="/api/leases", tags=["Leases"])


# Root endpoint
@app.get("/")
async def root() -> Dict[str, Any]:
    """API root endpoint with service information."""
    return {
        "service": "REPTrack API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
        "data_source": get_app_config().data_source,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reptrack.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
