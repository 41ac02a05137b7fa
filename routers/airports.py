"""routers/airports.py - Static airport picker, stored airport search and the Duffel airport sync job."""

import logging
from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from sqlalchemy import or_

from airports import get_airports_by_city, search_grouped
from config import get_service_role_key
from db import SessionLocal
from models import Airport
from providers.duffel import DuffelError
from schemas.airports import StoredAirport
from services.airport_sync import sync_airports

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_AIRPORTS_LIMIT = 10


# =====================================================================
# SECTION: STATIC AIRPORT LIST
# =====================================================================

@router.get("/api/airports")
def airport_picker(q: str = ""):
    return [r.model_dump(exclude_none=True) for r in search_grouped(q)]


@router.get("/api/airports/city/{city}")
def airports_for_city(city: str):
    return [a.model_dump() for a in get_airports_by_city(city)]


# =====================================================================
# SECTION: STORED AIRPORTS
# =====================================================================

@router.get("/api/search-airports")
def search_stored_airports(q: Optional[str] = None):
    query = (q or "").strip().lower()
    if not query:
        return []

    pattern = f"%{query}%"
    db = SessionLocal()
    try:
        rows = (
            db.query(Airport)
            .filter(
                or_(
                    Airport.city_name.ilike(pattern),
                    Airport.name.ilike(pattern),
                    Airport.iata_code.ilike(pattern),
                ),
                Airport.iata_code.isnot(None),
                Airport.iata_code != "",
            )
            .limit(SEARCH_AIRPORTS_LIMIT)
            .all()
        )
        results = [
            StoredAirport(name=a.name, city_name=a.city_name, iata_code=a.iata_code).model_dump()
            for a in rows
        ]
    except Exception as e:
        logger.error(f"[search-airports] query={query!r} failed: {e}")
        return JSONResponse({"error": str(e)}, status_code=500)
    finally:
        db.close()

    logger.info(f"[search-airports] query={query!r} results={len(results)}")
    return results


@router.api_route("/api/sync-airports", methods=["GET", "POST"])
def sync_airports_job(
    cron_secret: Optional[str] = Header(default=None, alias="x-vercel-cron-secret"),
):
    expected = get_service_role_key()
    if not cron_secret or not expected or cron_secret != expected:
        logger.warning("[sync-airports] unauthorized cron attempt")
        return JSONResponse({"error": "Unauthorized"}, status_code=403)

    try:
        count = sync_airports()
    except DuffelError as e:
        logger.error(f"[sync-airports] duffel error status={e.status_code} message={e.message}")
        return JSONResponse({"error": e.message or "Internal Server Error"}, status_code=500)
    except Exception as e:
        logger.error(f"[sync-airports] failed: {e}")
        return JSONResponse({"error": str(e) or "Internal Server Error"}, status_code=500)

    return {"message": "Sync complete", "count": count}
