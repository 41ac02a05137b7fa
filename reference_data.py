"""
reference_data.py

Static reference data served under /api/duffel/*. None of this calls Duffel;
it mirrors what Duffel accepts so the search form can build valid requests.
"""

from datetime import date
from typing import Any, Dict, List, Optional


# =====================================================================
# SECTION: CABIN CLASSES AND PASSENGER TYPES
# =====================================================================

CABIN_CLASSES: List[Dict[str, str]] = [
    {"id": "economy", "name": "Economy", "description": "Standard economy class"},
    {"id": "premium_economy", "name": "Premium Economy", "description": "Enhanced economy class with more comfort"},
    {"id": "business", "name": "Business", "description": "Business class with premium services"},
    {"id": "first", "name": "First", "description": "First class with the highest level of service"},
]

PASSENGER_TYPES: List[Dict[str, Any]] = [
    {
        "type": "adult",
        "name": "Adult",
        "description": "Passenger aged 12 or over",
        "minAge": 12,
        "maxAge": None,
        "requiresAdult": False,
    },
    {
        "type": "child",
        "name": "Child",
        "description": "Passenger aged 2-11",
        "minAge": 2,
        "maxAge": 11,
        "requiresAdult": True,
    },
    {
        "type": "infant",
        "name": "Infant",
        "description": "Passenger under 2 years old",
        "minAge": 0,
        "maxAge": 1,
        "requiresAdult": True,
    },
]


# =====================================================================
# SECTION: CURRENCIES
# =====================================================================

CURRENCIES: List[Dict[str, Any]] = [
    {"code": "USD", "name": "US Dollar", "symbol": "$", "isDefault": True},
    {"code": "EUR", "name": "Euro", "symbol": "€", "isDefault": False},
    {"code": "GBP", "name": "British Pound", "symbol": "£", "isDefault": False},
    {"code": "CAD", "name": "Canadian Dollar", "symbol": "C$", "isDefault": False},
    {"code": "AUD", "name": "Australian Dollar", "symbol": "A$", "isDefault": False},
    {"code": "JPY", "name": "Japanese Yen", "symbol": "¥", "isDefault": False},
    {"code": "CNY", "name": "Chinese Yuan", "symbol": "¥", "isDefault": False},
    {"code": "INR", "name": "Indian Rupee", "symbol": "₹", "isDefault": False},
    {"code": "BRL", "name": "Brazilian Real", "symbol": "R$", "isDefault": False},
    {"code": "MXN", "name": "Mexican Peso", "symbol": "Mex$", "isDefault": False},
]


# =====================================================================
# SECTION: SEARCH PARAMETER DESCRIPTIONS
# =====================================================================

SEARCH_PARAMETERS: Dict[str, Any] = {
    "origin": {
        "type": "string",
        "format": "IATA code",
        "description": "3-letter IATA airport code for departure",
        "example": "LHR",
        "required": True,
    },
    "destination": {
        "type": "string",
        "format": "IATA code",
        "description": "3-letter IATA airport code for arrival",
        "example": "JFK",
        "required": True,
    },
    "departureDate": {
        "type": "string",
        "format": "YYYY-MM-DD",
        "description": "Date of departure",
        "example": "2024-04-01",
        "required": True,
        "constraints": {"minDate": "Today", "maxDate": "365 days from today"},
    },
    "returnDate": {
        "type": "string",
        "format": "YYYY-MM-DD",
        "description": "Date of return (for round trips)",
        "example": "2024-04-08",
        "required": False,
        "constraints": {"minDate": "Same as departure date", "maxDate": "365 days from departure date"},
    },
    "passengers": {
        "type": "object",
        "description": "Number of passengers by type",
        "required": True,
        "properties": {
            "adults": {
                "type": "number",
                "description": "Number of adult passengers (12+ years)",
                "minimum": 1,
                "maximum": 9,
                "required": True,
            },
            "children": {
                "type": "number",
                "description": "Number of child passengers (2-11 years)",
                "minimum": 0,
                "maximum": 8,
                "required": False,
            },
            "infants": {
                "type": "number",
                "description": "Number of infant passengers (0-1 years)",
                "minimum": 0,
                "maximum": 8,
                "required": False,
            },
        },
        "constraints": {
            "totalPassengers": "Maximum 9 passengers total",
            "infantsPerAdult": "Maximum 1 infant per adult",
        },
    },
    "cabinClass": {
        "type": "string",
        "description": "Cabin class for the flight",
        "required": True,
        "enum": [c["id"] for c in CABIN_CLASSES],
        "default": "economy",
    },
    "currency": {
        "type": "string",
        "format": "ISO 4217",
        "description": "Currency for pricing",
        "example": "USD",
        "required": False,
        "default": "USD",
    },
    "maxConnections": {
        "type": "number",
        "description": "Maximum number of connections allowed",
        "minimum": 0,
        "maximum": 2,
        "required": False,
        "default": 2,
    },
}


# =====================================================================
# SECTION: OFFER CONSTRAINTS
# =====================================================================

OFFER_CONSTRAINTS: Dict[str, Any] = {
    "general": {
        "maxPassengers": 9,
        "maxInfantsPerAdult": 1,
        "maxBookingWindow": 365,  # days
        "minBookingWindow": 0,
    },
    "pricing": {
        "supportedCurrencies": ["USD", "EUR", "GBP", "CAD", "AUD"],
        "defaultCurrency": "USD",
        "priceRounding": 2,
    },
    "connections": {
        "maxConnections": 2,
        "minConnectionTime": 30,  # minutes
        "maxConnectionTime": 24,  # hours
    },
    "baggage": {
        "cabinBaggage": {"maxWeight": 10, "maxDimensions": "55x40x20"},
        "checkedBaggage": {"maxWeight": 32, "maxDimensions": "90x75x43"},
    },
    "booking": {
        "maxOffersPerRequest": 50,
        "offerExpirationTime": 300,  # seconds
        "maxPaxPerBooking": 9,
        "minPaxPerBooking": 1,
    },
    "payment": {
        "supportedPaymentMethods": ["credit_card", "debit_card"],
        "requiredFields": ["card_number", "expiry_date", "cvv", "cardholder_name"],
    },
    "cancellation": {
        "refundable": {"allowed": True, "timeLimit": 24, "feePercentage": 10},
        "nonRefundable": {"allowed": False, "exceptions": ["medical_emergency", "death_in_family"]},
    },
    "changes": {
        "allowed": True,
        "timeLimit": 24,
        "feePercentage": 15,
        "restrictions": ["same_airline", "same_route"],
    },
}


# =====================================================================
# SECTION: IATA CODE VALIDATION RULES
# =====================================================================

IATA_VALIDATION_RULES: Dict[str, Any] = {
    "format": {
        "type": "string",
        "pattern": "^[A-Z]{3}$",
        "description": "3 uppercase letters",
        "example": "LHR",
    },
    "constraints": {
        "minLength": 3,
        "maxLength": 3,
        "allowedCharacters": "A-Z",
        "caseSensitive": True,
    },
    "commonCodes": {
        "LHR": "London Heathrow",
        "JFK": "New York JFK",
        "LAX": "Los Angeles",
        "SFO": "San Francisco",
        "CDG": "Paris Charles de Gaulle",
        "FRA": "Frankfurt",
        "SIN": "Singapore",
        "HKG": "Hong Kong",
        "DXB": "Dubai",
        "SYD": "Sydney",
    },
}


# =====================================================================
# SECTION: DATE CONSTRAINTS (computed per request)
# =====================================================================

def _add_one_year(d: date) -> date:
    try:
        return d.replace(year=d.year + 1)
    except ValueError:
        # 29 Feb
        return d.replace(year=d.year + 1, day=28)


def date_constraints(today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    one_year = _add_one_year(today)

    return {
        "format": {
            "type": "string",
            "pattern": r"^\d{4}-\d{2}-\d{2}$",
            "description": "ISO 8601 date format (YYYY-MM-DD)",
            "example": "2024-04-01",
        },
        "validation": {
            "regex": r"^\d{4}-\d{2}-\d{2}$",
            "dateFormat": "YYYY-MM-DD",
            "allowedSeparators": ["-"],
            "requiredFields": ["year", "month", "day"],
        },
        "constraints": {
            "departureDate": {
                "minDate": today.isoformat(),
                "maxDate": one_year.isoformat(),
                "description": "Must be between today and one year from now",
            },
            "returnDate": {
                "minDate": "Same as departure date",
                "maxDate": "365 days after departure date",
                "description": "Must be after departure date and within one year",
            },
            "bookingWindow": {
                "minDays": 0,
                "maxDays": 365,
                "description": "Can book flights up to one year in advance",
            },
            "blackoutDates": {
                "description": "Some airlines may have blackout dates during peak seasons",
                "examples": [
                    "Christmas (Dec 24-26)",
                    "New Year (Dec 31-Jan 2)",
                    "Thanksgiving (US)",
                    "Easter",
                ],
            },
        },
        "timeConstraints": {
            "departureTime": {"format": "HH:mm", "description": "24-hour format", "example": "14:30"},
            "arrivalTime": {"format": "HH:mm", "description": "24-hour format", "example": "16:45"},
            "timezone": {
                "format": "UTC±HH:mm",
                "description": "Airport local time in UTC offset",
                "example": "UTC+00:00",
            },
        },
        "commonRules": {
            "sameDayBooking": {"allowed": True, "restrictions": "Must be at least 2 hours before departure"},
            "lastMinuteBooking": {"allowed": True, "restrictions": "Must be at least 1 hour before departure"},
            "dateChanges": {"allowed": True, "restrictions": "Subject to airline policy and fees"},
        },
    }
