"""FastAPI application entrypoint: lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import get_settings
from app.database import engine
from app.errors import register_exception_handlers
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.routes import crops, gallery, users

logger = structlog.get_logger("taxfarm")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database connection pool with ``SELECT 1``

    Shutdown:
      1. Dispose the SQLAlchemy engine (closes pooled connections)
    """
    configure_structured_logging()
    logger.info(
        "TaxFarm API starting",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("startup failure", error=str(exc))
        raise

    yield

    logger.info("TaxFarm API shutting down")
    await engine.dispose()


app = FastAPI(
    title="TaxFarm API",
    description=(
        "Backend for tokenized farmland: crop tokens, plot photo gallery "
        "and wallet-based users."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

# ── Middleware (last added runs first) ──────────────────────────────────────
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health checks ───────────────────────────────────────────────────────────
async def _run_readiness_checks(_app: FastAPI) -> dict[str, dict[str, Any]]:
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        return {"database": {"ok": False, "message": str(exc)}}
    return {"database": {"ok": True, "message": "ok"}}


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, Any]:
    """Liveness probe: verifies the API process is alive."""
    return {
        "success": True,
        "status": "OK",
        "message": "Server is running successfully",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/health/ready", tags=["system"])
async def readiness_check() -> JSONResponse:
    """Readiness probe: 503 while the database is unreachable."""
    checks = await _run_readiness_checks(app)
    ready = all(check["ok"] for check in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "success": ready,
            "status": "ok" if ready else "degraded",
            "checks": checks,
        },
    )


@app.get("/", tags=["system"])
async def root() -> dict[str, Any]:
    return {
        "success": True,
        "message": "Welcome to TaxFarm Backend API",
        "version": settings.app_version,
        "endpoints": {
            "health": "/health",
            "users": "/api/users",
            "crops": "/api/crops",
            "gallery": "/api/gallery",
        },
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(crops.router, prefix="/api")
app.include_router(gallery.router, prefix="/api")
app.include_router(users.router, prefix="/api")
