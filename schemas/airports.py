"""schemas/airports.py - Static airport records and airport search results."""

from typing import List, Literal, Optional

from pydantic import BaseModel


class Airport(BaseModel):
    code: str
    name: str
    city: str
    state: str
    country: str
    latitude: float
    longitude: float


class AirportSearchResult(BaseModel):
    type: Literal["city", "airport"]
    code: str
    name: str
    city: str
    state: str
    country: str
    airports: Optional[List[Airport]] = None


class StoredAirport(BaseModel):
    """Row shape returned by /api/search-airports."""
    name: str
    city_name: Optional[str] = None
    iata_code: str
