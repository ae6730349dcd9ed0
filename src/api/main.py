"""
FastAPI application for subnet-trainer.

Provides REST API for:
- Binary / hexadecimal / decimal conversion exercises
- IPv4 subnetting, VLSM, wildcard, summarization and IPv6 exercises
- Answer checking
- Practice session history and mastery
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from src.db.database import get_engine, init_db

settings = get_settings()

VERSION = "0.1.0"


def _check_database_health() -> tuple[str, str | None]:
    """
    Check database connectivity.

    Returns:
        Tuple of (status, error_message). Status is "ok" or "error".
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "ok", None
    except SQLAlchemyError as e:
        return "error", str(e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    logger.info("Starting subnet-trainer service...")
    init_db()
    logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

    yield

    # Shutdown
    logger.info("Shutting down subnet-trainer service...")


app = FastAPI(
    title="Subnet Trainer",
    description="""
    Practice generator for number conversion and IP addressing.

    ## Features

    - **Binary**: bin2dec, bin2hex, hex2bin, dec2bin, dec2hex, hex2dec at three difficulties
    - **Subnetting**: basic, VLSM, wildcard/ACL, network calculation, summarization, IPv6
    - **Checking**: equivalent answer forms accepted (CIDR vs dotted mask, with or without prefix)
    - **Progress**: practice sessions with mastery per area
    """,
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "subnet-trainer",
        "version": VERSION,
        "status": "ok",
    }


@app.get("/health", tags=["Health"])
def health_check() -> dict[str, Any]:
    """Health check with an actual database round trip."""
    db_status, db_error = _check_database_health()

    result: dict[str, Any] = {
        "status": "healthy" if db_status == "ok" else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {"database": db_status},
        "config": settings.get_generation_config(),
    }
    if db_error:
        result["errors"] = {"database": db_error}

    return result


# ========================================
# Import and mount routers
# ========================================

from src.api.routers import binary_router, progress_router, subnetting_router

app.include_router(binary_router.router, prefix="/api/binary", tags=["Binary"])
app.include_router(subnetting_router.router, prefix="/api/subnetting", tags=["Subnetting"])
app.include_router(progress_router.router, prefix="/api", tags=["Progress"])
