"""
providers/duffel.py

Duffel API helpers:
- Low-level HTTP wrappers (duffel_get, duffel_post)
- Offer request creation (async search flow)
- Offer listing with sort / limit / after cursor
- One-shot search (create + first page) with friendly error messages
- Offer details, seat maps, orders
- Airline and airport reference listings

Offers and offer requests are relayed to the client untouched.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from config import (
    DEFAULT_OFFERS_LIMIT,
    DEFAULT_OFFERS_SORT,
    DUFFEL_API_BASE,
    DUFFEL_TIMEOUT_SECONDS,
    DUFFEL_VERSION,
    SEARCH_TIME_WINDOW,
    get_duffel_token,
)
from schemas.search import FlightSearchParams

logger = logging.getLogger(__name__)


class DuffelError(Exception):
    """Upstream failure, carrying Duffel's HTTP status and error list."""

    def __init__(self, status_code: int, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status_code, "message": self.message, "errors": self.errors}


# =====================================================================
# SECTION: LOW LEVEL HTTP HELPERS
# =====================================================================

def _duffel_token() -> str:
    token = get_duffel_token()
    if not token:
        raise DuffelError(500, "Duffel API token is not defined in environment variables")
    return token


def _headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {_duffel_token()}",
        "Duffel-Version": DUFFEL_VERSION,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def _error_message(data: Any, fallback: str) -> str:
    # Duffel error bodies: {"errors": [{"title": ..., "message": ..., "code": ...}], "meta": {...}}
    if isinstance(data, dict):
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0] or {}
            return first.get("message") or first.get("title") or first.get("code") or fallback
        if data.get("raw"):
            return str(data["raw"])[:500]
    return fallback


def _duffel_request(
    method: str,
    path: str,
    params: Optional[dict] = None,
    payload: Optional[dict] = None,
) -> dict:
    """Perform a Duffel call and return the full JSON body ({"data": ..., "meta": ...})."""
    headers = _headers()
    url = DUFFEL_API_BASE + path
    try:
        resp = requests.request(
            method,
            url,
            headers=headers,
            params=params or None,
            json=payload,
            timeout=DUFFEL_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"[duffel] {method} {path} request failed: {e}")
        raise DuffelError(502, f"Duffel request failed: {e}")

    try:
        data = resp.json()
    except ValueError:
        data = {"raw": resp.text}

    request_id = (
        resp.headers.get("Request-Id")
        or resp.headers.get("Duffel-Request-Id")
        or resp.headers.get("X-Request-Id")
    )

    if resp.status_code >= 400:
        safe_body = (resp.text or "").replace("\n", "\\n").replace("\r", "\\r")
        logger.warning(
            f"[duffel] {method} {path} status={resp.status_code} request_id={request_id} body={safe_body[:1200]}"
        )
        errors = data.get("errors") if isinstance(data, dict) else None
        raise DuffelError(
            resp.status_code,
            _error_message(data, f"Duffel API error (HTTP {resp.status_code})"),
            errors if isinstance(errors, list) else None,
        )

    logger.info(f"[duffel] {method} {path} status={resp.status_code} request_id={request_id}")
    return data if isinstance(data, dict) else {"data": data}


def duffel_post(path: str, payload: dict) -> Any:
    return _duffel_request("POST", path, payload=payload).get("data")


def duffel_get(path: str, params: Optional[dict] = None) -> Any:
    return _duffel_request("GET", path, params=params).get("data")


# =====================================================================
# SECTION: OFFER REQUESTS
# =====================================================================

def build_passengers(params: FlightSearchParams) -> List[dict]:
    pax = params.passengers
    return (
        [{"type": "adult"} for _ in range(pax.adults)]
        + [{"type": "child"} for _ in range(pax.children or 0)]
        + [{"type": "infant"} for _ in range(pax.infants or 0)]
    )


def build_offer_request_payload(params: FlightSearchParams) -> dict:
    """
    One outbound slice, plus a mirrored return slice when returnDate is set.
    Departure and arrival are both limited to the daytime window.
    """
    window = dict(SEARCH_TIME_WINDOW)
    slices = [
        {
            "origin": params.origin,
            "destination": params.destination,
            "departure_date": params.departureDate,
            "departure_time": window,
            "arrival_time": window,
        }
    ]
    if params.returnDate:
        slices.append({
            "origin": params.destination,
            "destination": params.origin,
            "departure_date": params.returnDate,
            "departure_time": window,
            "arrival_time": window,
        })

    return {
        "data": {
            "slices": slices,
            "passengers": build_passengers(params),
            "cabin_class": params.cabinClass.value,
        }
    }


def create_offer_request(params: FlightSearchParams) -> str:
    """Create an offer request without waiting for offers; returns its id."""
    payload = build_offer_request_payload(params)
    logger.info(
        f"[duffel] create_offer_request origin={params.origin} dest={params.destination} "
        f"dep={params.departureDate} ret={params.returnDate} cabin={params.cabinClass.value} "
        f"pax={len(payload['data']['passengers'])}"
    )
    data = _duffel_request(
        "POST",
        "/air/offer_requests",
        params={"return_offers": "false"},
        payload=payload,
    ).get("data") or {}

    offer_request_id = data.get("id")
    if not offer_request_id:
        raise DuffelError(502, "Duffel did not return an offer request id")
    return offer_request_id


# =====================================================================
# SECTION: OFFERS
# =====================================================================

def list_offers(
    offer_request_id: str,
    sort: Optional[str] = DEFAULT_OFFERS_SORT,
    limit: int = DEFAULT_OFFERS_LIMIT,
    after: Optional[str] = None,
) -> dict:
    """One page of offers for an offer request: {"data": [...], "meta": {...}}."""
    if not offer_request_id or not isinstance(offer_request_id, str):
        raise ValueError("Missing or invalid offerRequestId")
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool)):
        raise ValueError("Invalid limit parameter")

    params: Dict[str, Any] = {"offer_request_id": offer_request_id, "limit": limit}
    if after is not None:
        params["after"] = after
    if sort and isinstance(sort, str):
        params["sort"] = sort

    body = _duffel_request("GET", "/air/offers", params=params)
    offers = body.get("data")
    return {
        "data": offers if isinstance(offers, list) else [],
        "meta": body.get("meta") or {},
    }


_FRIENDLY_SEARCH_ERRORS = {
    504: "The flight search request timed out. Please try again with different dates or airports.",
    401: "Authentication error with flight search provider. Please contact support.",
    429: "Too many requests. Please try again in a few minutes.",
}


def search_flights(params: FlightSearchParams) -> dict:
    """Create an offer request and fetch its first page of offers."""
    try:
        offer_request_id = create_offer_request(params)
        page = list_offers(
            offer_request_id,
            sort=(params.sort.value if params.sort else DEFAULT_OFFERS_SORT),
            limit=params.limit or DEFAULT_OFFERS_LIMIT,
            after=params.after,
        )
    except DuffelError as e:
        logger.error(f"[duffel] search_flights failed status={e.status_code} message={e.message}")
        if e.status_code in _FRIENDLY_SEARCH_ERRORS:
            raise DuffelError(e.status_code, _FRIENDLY_SEARCH_ERRORS[e.status_code], e.errors)
        if "timed out" in e.message.lower():
            raise DuffelError(
                504,
                "The flight search request timed out. Please try again with a simpler search or different dates.",
                e.errors,
            )
        raise

    logger.info(f"[duffel] search_flights offer_request_id={offer_request_id} offers={len(page['data'])}")
    page["offer_request_id"] = offer_request_id
    return page


def get_offer(offer_id: str) -> dict:
    return duffel_get(f"/air/offers/{offer_id}")


def get_seat_maps(offer_id: str) -> List[dict]:
    """Seat maps for an offer; an empty list when the airline has none."""
    try:
        data = duffel_get("/air/seat_maps", params={"offer_id": offer_id})
    except DuffelError as e:
        if e.status_code == 404:
            return []
        raise
    logger.info(f"[duffel] seat maps offer_id={offer_id} count={len(data or [])}")
    return data or []


def create_order(offer_id: str, passengers: List[dict]) -> dict:
    payload = {
        "data": {
            "type": "instant",
            "selected_offers": [offer_id],
            "passengers": passengers,
        }
    }
    return duffel_post("/air/orders", payload)


# =====================================================================
# SECTION: REFERENCE LISTINGS
# =====================================================================

def list_airlines(limit: Optional[int] = None) -> List[dict]:
    params = {"limit": int(limit)} if limit else None
    return duffel_get("/air/airlines", params=params) or []


def list_airports(limit: int = 100, after: Optional[str] = None) -> dict:
    params: Dict[str, Any] = {"limit": int(limit)}
    if after:
        params["after"] = after
    body = _duffel_request("GET", "/air/airports", params=params)
    return {"data": body.get("data") or [], "meta": body.get("meta") or {}}


def list_all_airports(page_size: int = 100) -> List[dict]:
    """Walk the airports listing with the `after` cursor until it runs out."""
    airports: List[dict] = []
    after: Optional[str] = None
    while True:
        page = list_airports(limit=page_size, after=after)
        airports.extend(page["data"])
        after = (page["meta"] or {}).get("after")
        if not after:
            break
    logger.info(f"[duffel] fetched airports total={len(airports)}")
    return airports
