"""routers/health.py - Liveness, dependency health and route listing."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from config import APP_ENV
from services.health_service import check_database, check_duffel, check_unsplash, overall_status

logger = logging.getLogger(__name__)

router = APIRouter()

APP_VERSION = "0.1.0"
STARTED_AT = time.monotonic()


@router.get("/")
def home():
    return {"message": "GoJumpingJack backend is running"}


@router.get("/api/health")
def health():
    started = time.monotonic()
    checks = {
        "database": check_database(),
        "duffel": check_duffel(),
        "unsplash": check_unsplash(),
    }
    status = overall_status(checks)

    logger.info(
        f"[health] status={status} duration_ms={int((time.monotonic() - started) * 1000)} "
        + " ".join(f"{name}={c['status']}" for name, c in checks.items())
    )
    body = {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": APP_VERSION,
        "environment": APP_ENV,
        "checks": checks,
        "uptime": int((time.monotonic() - STARTED_AT) * 1000),
    }
    return JSONResponse(body, status_code=503 if status == "unhealthy" else 200)


@router.head("/api/health")
def health_head():
    return Response(status_code=200)


@router.get("/routes")
def list_routes_handler():
    # Imported lazily to avoid circular import
    from main import app
    return [route.path for route in app.routes]
