"""routers/duffel.py - Duffel-backed and static reference data under /api/duffel/*."""

import logging
from datetime import date, timedelta

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from providers.duffel import DuffelError, list_airlines, list_airports, search_flights
from reference_data import (
    CABIN_CLASSES,
    CURRENCIES,
    IATA_VALIDATION_RULES,
    OFFER_CONSTRAINTS,
    PASSENGER_TYPES,
    SEARCH_PARAMETERS,
    date_constraints,
)
from schemas.search import CabinClass, FlightSearchParams, PassengerCounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/duffel")


def _ok(message: str, data) -> dict:
    return {"success": True, "message": message, "data": data}


def _fail(e: DuffelError, fallback: str) -> JSONResponse:
    return JSONResponse({"success": False, "error": e.message or fallback}, status_code=500)


# =====================================================================
# SECTION: DUFFEL-BACKED LISTINGS
# =====================================================================

@router.get("/airlines")
def airlines():
    try:
        data = list_airlines()
    except DuffelError as e:
        logger.error(f"[duffel-airlines] {e.message}")
        return _fail(e, "Failed to retrieve airlines")

    enhanced = [
        {
            **airline,
            "hasLogo": bool(airline.get("logo_symbol_url")),
            "hasConditions": bool(airline.get("conditions_of_carriage_url")),
            "isActive": True,
        }
        for airline in data
    ]
    return _ok("Successfully retrieved airlines", enhanced)


@router.get("/airports")
def airports():
    try:
        page = list_airports()
    except DuffelError as e:
        logger.error(f"[duffel-airports] {e.message}")
        return _fail(e, "Failed to retrieve airports")
    return _ok("Successfully retrieved airports", page["data"])


@router.get("/iata-codes")
def iata_codes():
    try:
        page = list_airports()
    except DuffelError as e:
        logger.error(f"[duffel-iata-codes] {e.message}")
        return _fail(e, "Failed to retrieve IATA codes")

    enhanced = [
        {
            "iata_code": a.get("iata_code"),
            "name": a.get("name"),
            "city": a.get("city"),
            "timezone": a.get("time_zone"),
            "coordinates": {"latitude": a.get("latitude"), "longitude": a.get("longitude")},
            "validation": {
                "format": "3 uppercase letters",
                "pattern": "^[A-Z]{3}$",
                "example": a.get("iata_code"),
            },
        }
        for a in page["data"]
    ]
    return _ok(
        "Successfully retrieved IATA codes and validation rules",
        {"airports": enhanced, "validationRules": IATA_VALIDATION_RULES},
    )


@router.get("/test")
def connection_test():
    try:
        data = list_airlines()
    except DuffelError as e:
        logger.error(f"[duffel-test] {e.message}")
        return _fail(e, "Failed to connect to Duffel API")
    return _ok("Successfully connected to Duffel API", data)


@router.get("/test-search")
def test_search():
    params = FlightSearchParams(
        origin="LHR",
        destination="JFK",
        departureDate=(date.today() + timedelta(days=30)).isoformat(),
        passengers=PassengerCounts(adults=1),
        cabinClass=CabinClass.ECONOMY,
    )
    try:
        page = search_flights(params)
    except DuffelError as e:
        logger.error(f"[duffel-test-search] {e.message}")
        return _fail(e, "Failed to perform test search")

    return {
        "success": True,
        "message": "Successfully performed test search",
        "searchParams": params.model_dump(mode="json", exclude_none=True),
        "data": page["data"],
    }


# =====================================================================
# SECTION: STATIC REFERENCE DATA
# =====================================================================

@router.get("/cabin-classes")
def cabin_classes():
    return _ok("Successfully retrieved cabin classes", CABIN_CLASSES)


@router.get("/passenger-types")
def passenger_types():
    return _ok("Successfully retrieved passenger types", PASSENGER_TYPES)


@router.get("/currencies")
def currencies():
    return _ok("Successfully retrieved currencies", CURRENCIES)


@router.get("/search-parameters")
def search_parameters():
    return _ok("Successfully retrieved search parameters", SEARCH_PARAMETERS)


@router.get("/offer-constraints")
def offer_constraints():
    return _ok("Successfully retrieved offer constraints", OFFER_CONSTRAINTS)


@router.get("/date-constraints")
def get_date_constraints():
    return _ok("Successfully retrieved date constraints", date_constraints())
