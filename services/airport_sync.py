"""
services/airport_sync.py

Copies Duffel's airport list into the airports table so /api/search-airports
can answer from the database. Rows are keyed on iata_code; airports without
an IATA code are skipped.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from db import SessionLocal
from models import Airport
from providers.duffel import list_all_airports

logger = logging.getLogger(__name__)

UPSERT_CHUNK_SIZE = 500
DUFFEL_PAGE_SIZE = 100


def map_duffel_airport(raw: dict) -> Optional[dict]:
    iata = (raw.get("iata_code") or "").strip().upper()
    if not iata:
        return None
    return {
        "duffel_id": raw.get("id"),
        "iata_code": iata,
        "name": raw.get("name") or iata,
        "city_name": raw.get("city_name") or (raw.get("city") or {}).get("name"),
        "country_code": raw.get("iata_country_code"),
        "latitude": raw.get("latitude"),
        "longitude": raw.get("longitude"),
    }


def _chunks(rows: List[dict], size: int) -> Iterable[List[dict]]:
    for i in range(0, len(rows), size):
        yield rows[i:i + size]


def upsert_airports(db: Session, rows: List[dict], chunk_size: int = UPSERT_CHUNK_SIZE) -> int:
    """Insert or update rows by iata_code, committing once per chunk."""
    written = 0
    for chunk in _chunks(rows, chunk_size):
        codes = [r["iata_code"] for r in chunk]
        existing = {
            a.iata_code: a
            for a in db.query(Airport).filter(Airport.iata_code.in_(codes)).all()
        }
        now = datetime.utcnow()
        for row in chunk:
            airport = existing.get(row["iata_code"])
            if airport is None:
                airport = Airport(iata_code=row["iata_code"])
                db.add(airport)
                existing[row["iata_code"]] = airport
            airport.duffel_id = row["duffel_id"]
            airport.name = row["name"]
            airport.city_name = row["city_name"]
            airport.country_code = row["country_code"]
            airport.latitude = row["latitude"]
            airport.longitude = row["longitude"]
            airport.updated_at = now
        db.commit()
        written += len(chunk)
        logger.info(f"[sync-airports] upserted chunk size={len(chunk)} total={written}")
    return written


def sync_airports() -> int:
    raw_airports = list_all_airports(page_size=DUFFEL_PAGE_SIZE)

    rows = []
    seen = set()
    for raw in raw_airports:
        row = map_duffel_airport(raw)
        if row is None or row["iata_code"] in seen:
            continue
        seen.add(row["iata_code"])
        rows.append(row)

    db = SessionLocal()
    try:
        count = upsert_airports(db, rows)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info(f"[sync-airports] fetched={len(raw_airports)} stored={count}")
    return count
