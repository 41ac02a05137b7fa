"""
providers/travelpayouts.py

Cheapest cached prices from the Travelpayouts (Aviasales) prices_for_dates
endpoint. Used for the price hints on destination pages, separate from the
live Duffel search.
"""

import logging
from typing import Optional

import requests

from config import TRAVELPAYOUTS_API_BASE, get_travelpayouts_token

logger = logging.getLogger(__name__)


def _fetch(params: dict) -> dict:
    resp = requests.get(TRAVELPAYOUTS_API_BASE, params=params, timeout=30)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        return {"data": []}
    if not isinstance(data.get("data"), list):
        data["data"] = []
    return data


def fetch_prices_for_dates(
    origin: str,
    destination: str,
    departure_at: Optional[str] = None,
    return_at: Optional[str] = None,
) -> dict:
    """
    Exact-date lookup first. When that is empty and a departure date was
    given, retry with no dates and flag the result as not an exact match.
    """
    base = {
        "origin": origin,
        "destination": destination,
        "currency": "usd",
        "token": get_travelpayouts_token() or "",
    }

    params = dict(base)
    if departure_at:
        params["departure_at"] = departure_at
    if return_at:
        params["return_at"] = return_at

    data = _fetch(params)

    if not data["data"] and departure_at:
        logger.info(f"[travelpayouts] no exact match {origin}->{destination} dep={departure_at}, retrying without dates")
        fallback = _fetch(base)
        return {"exactMatch": False, **fallback}

    return {"exactMatch": True, **data}
