"""schemas/search.py - Pydantic models for offer search requests and relayed results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CabinClass(str, Enum):
    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"


class OfferSort(str, Enum):
    PRICE = "total_amount"
    PRICE_DESC = "-total_amount"
    DURATION = "total_duration"
    DURATION_DESC = "-total_duration"


class SearchStatus(str, Enum):
    PENDING = "pending"
    COMPLETE = "complete"


class PassengerCounts(BaseModel):
    adults: int = Field(..., ge=0)
    # null counts are accepted and treated as 0
    children: Optional[int] = Field(0, ge=0)
    infants: Optional[int] = Field(0, ge=0)


class FlightSearchParams(BaseModel):
    """
    Only presence is checked. Dates stay as the client sent them and
    airport codes are not checked against anything; Duffel rejects bad ones.
    """
    origin: str
    destination: str
    departureDate: str
    returnDate: Optional[str] = None
    passengers: PassengerCounts
    cabinClass: CabinClass

    after: Optional[str] = None
    sort: Optional[OfferSort] = None
    limit: Optional[int] = None


REQUIRED_SEARCH_FIELDS = ("origin", "destination", "departureDate", "passengers", "cabinClass")

