"""routers/flights.py - Offer search relay, offer details, seat maps and cached price lookups."""

import logging
import re
from typing import Any, Dict, Optional

import requests
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import DEFAULT_OFFERS_LIMIT, DEFAULT_OFFERS_SORT
from providers.duffel import DuffelError, create_offer_request, get_offer, get_seat_maps, list_offers
from providers.duffel_fixtures import TEST_OFFER_ID, sample_offer
from providers.travelpayouts import fetch_prices_for_dates
from schemas.search import REQUIRED_SEARCH_FIELDS, FlightSearchParams, SearchStatus

logger = logging.getLogger(__name__)

router = APIRouter()

OFFER_ID_RE = re.compile(r"^off_[A-Za-z0-9_]+$")
SEAT_MAP_UNAVAILABLE = (
    "Online seat selection is not available for this airline. Seats will be assigned during check-in."
)


def _is_offer_not_found(e: DuffelError) -> bool:
    if e.status_code == 404:
        return True
    codes = {(err or {}).get("code") for err in e.errors}
    return "offer_not_found" in codes or "offer_not_found" in e.message


# =====================================================================
# SECTION: ASYNC SEARCH (initiate + poll)
# =====================================================================

@router.post("/api/flights/initiate-search")
def initiate_search(payload: Optional[Dict[str, Any]] = Body(default=None)):
    logger.info("[initiate-search] received request")
    payload = payload or {}

    if any(not payload.get(field) for field in REQUIRED_SEARCH_FIELDS):
        return JSONResponse({"message": "Missing required parameters"}, status_code=400)

    try:
        params = FlightSearchParams(**payload)
    except ValidationError as e:
        logger.warning(f"[initiate-search] invalid parameters: {e.error_count()} errors")
        return JSONResponse({"message": "Invalid search parameters"}, status_code=400)

    try:
        offer_request_id = create_offer_request(params)
    except DuffelError as e:
        logger.error(f"[initiate-search] duffel error status={e.status_code} message={e.message}")
        return JSONResponse({"message": e.message or "Failed to initiate search"}, status_code=500)

    logger.info(f"[initiate-search] offer_request_id={offer_request_id}")
    return {"offer_request_id": offer_request_id, "status": SearchStatus.PENDING.value}


@router.get("/api/flights/results")
def search_results(
    offer_request_id: Optional[str] = None,
    sort: Optional[str] = DEFAULT_OFFERS_SORT,
    limit: Optional[str] = None,
    after: Optional[str] = None,
):
    if not offer_request_id:
        logger.error("[results] missing offer_request_id")
        return JSONResponse({"message": "Missing offer_request_id"}, status_code=400)

    if limit is None or limit == "":
        page_size = DEFAULT_OFFERS_LIMIT
    else:
        try:
            page_size = int(limit)
        except ValueError:
            return JSONResponse({"message": "Invalid limit parameter"}, status_code=400)

    logger.info(f"[results] offer_request_id={offer_request_id} sort={sort} limit={page_size} after={after}")
    try:
        page = list_offers(offer_request_id, sort=sort, limit=page_size, after=after or None)
    except DuffelError as e:
        logger.error(f"[results] duffel error status={e.status_code} message={e.message}")
        return JSONResponse(
            {"message": e.message or "Duffel API error", "details": e.to_dict()},
            status_code=502,
        )

    offers = page["data"]
    meta = page["meta"]
    if not offers:
        return {"status": SearchStatus.PENDING.value, "offers": [], "meta": meta}
    return {"status": SearchStatus.COMPLETE.value, "offers": offers, "meta": meta}


# =====================================================================
# SECTION: OFFER DETAILS AND SEAT MAPS
# =====================================================================

@router.get("/api/flights/offers/test")
def test_offer():
    return {"success": True, "message": "Test offer data structure", "data": sample_offer()}


@router.get("/api/flights/offers/{offer_id}")
def offer_details(offer_id: str):
    if not OFFER_ID_RE.match(offer_id):
        return JSONResponse({"success": False, "error": "Invalid offer ID format"}, status_code=400)

    if offer_id == TEST_OFFER_ID:
        return {"success": True, "data": sample_offer()}

    try:
        offer = get_offer(offer_id)
    except DuffelError as e:
        logger.error(f"[offers] offer_id={offer_id} status={e.status_code} message={e.message}")
        if _is_offer_not_found(e):
            return JSONResponse(
                {
                    "success": False,
                    "error": "This flight offer has expired or is no longer available. Please search again.",
                },
                status_code=404,
            )
        return JSONResponse({"success": False, "error": e.message}, status_code=500)

    if not offer:
        return JSONResponse({"success": False, "error": "Offer not found"}, status_code=404)
    return {"success": True, "data": offer}


@router.get("/api/flights/offers/{offer_id}/seat_map")
def offer_seat_map(offer_id: str):
    if not OFFER_ID_RE.match(offer_id):
        return JSONResponse(
            {"success": False, "available": False, "error": "Invalid offer ID format"},
            status_code=400,
        )

    unavailable = {"success": True, "available": False, "data": [], "message": SEAT_MAP_UNAVAILABLE}
    if offer_id == TEST_OFFER_ID:
        return unavailable

    try:
        seat_maps = get_seat_maps(offer_id)
    except DuffelError as e:
        logger.error(f"[seat-map] offer_id={offer_id} status={e.status_code} message={e.message}")
        text = e.message + " " + " ".join(str((err or {}).get("code")) for err in e.errors)
        if "seat_maps_not_available" in text or "not_supported" in text:
            return unavailable
        if "offer_not_found" in text:
            return JSONResponse(
                {
                    "success": False,
                    "available": False,
                    "error": "This flight offer has expired or is no longer available.",
                },
                status_code=404,
            )
        return JSONResponse({"success": False, "available": False, "error": e.message}, status_code=500)

    if not seat_maps:
        return unavailable
    return {
        "success": True,
        "available": True,
        "data": seat_maps,
        "message": "Seat maps retrieved successfully",
    }


# =====================================================================
# SECTION: CACHED PRICES (Travelpayouts)
# =====================================================================

@router.get("/api/flights")
def cached_prices(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    departure_at: Optional[str] = None,
    return_at: Optional[str] = None,
):
    if not origin or not destination:
        return JSONResponse({"error": "Missing origin or destination"}, status_code=400)

    try:
        return fetch_prices_for_dates(origin, destination, departure_at, return_at)
    except requests.RequestException as e:
        logger.error(f"[flights] travelpayouts lookup failed {origin}->{destination}: {e}")
        return JSONResponse({"error": "Failed to fetch prices"}, status_code=502)
