"""
services/health_service.py

Dependency checks for /api/health. Each check returns
{"status": "ok" | "degraded" | "error", "message": str, "responseTime": ms}.
"""

import logging
import time
from typing import Dict

import requests
from sqlalchemy import text

from config import UNSPLASH_API_BASE, get_unsplash_key
from db import SessionLocal
from providers.duffel import DuffelError, list_airlines

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def check_database() -> Dict:
    start = time.monotonic()
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "message": "Database connection successful", "responseTime": _elapsed_ms(start)}
    except Exception as e:
        logger.error(f"[health] database check failed: {e}")
        return {"status": "error", "message": str(e) or "Database connection failed", "responseTime": _elapsed_ms(start)}
    finally:
        db.close()


def check_duffel() -> Dict:
    start = time.monotonic()
    try:
        list_airlines(limit=1)
        return {"status": "ok", "message": "Duffel API connection successful", "responseTime": _elapsed_ms(start)}
    except DuffelError as e:
        logger.error(f"[health] duffel check failed: {e.message}")
        return {"status": "error", "message": e.message, "responseTime": _elapsed_ms(start)}


def check_unsplash() -> Dict:
    start = time.monotonic()
    key = get_unsplash_key()
    if not key:
        return {
            "status": "degraded",
            "message": "Unsplash API not configured (optional service)",
            "responseTime": _elapsed_ms(start),
        }
    try:
        resp = requests.get(
            f"{UNSPLASH_API_BASE}/photos/random",
            params={"count": 1},
            headers={"Authorization": f"Client-ID {key}"},
            timeout=10,
        )
    except requests.RequestException as e:
        logger.warning(f"[health] unsplash check failed: {e}")
        return {"status": "degraded", "message": str(e), "responseTime": _elapsed_ms(start)}

    if not resp.ok:
        logger.warning(f"[health] unsplash check status={resp.status_code}")
        return {
            "status": "degraded",
            "message": f"Unsplash API returned {resp.status_code}",
            "responseTime": _elapsed_ms(start),
        }
    return {"status": "ok", "message": "Unsplash API connection successful", "responseTime": _elapsed_ms(start)}


def overall_status(checks: Dict[str, Dict]) -> str:
    """Database and Duffel are critical; anything else short of ok degrades."""
    for name in ("database", "duffel"):
        if (checks.get(name) or {}).get("status") == "error":
            return "unhealthy"
    if any((c or {}).get("status") != "ok" for c in checks.values()):
        return "degraded"
    return "healthy"
