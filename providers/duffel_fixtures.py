"""providers/duffel_fixtures.py - Bundled sample offer for exercising the offer details page without Duffel."""

import copy

TEST_OFFER_ID = "off_test_123456789"

_AIRPORT_LHR = {
    "id": "arp_lhr_gb",
    "iata_code": "LHR",
    "name": "London Heathrow Airport",
    "city": {"name": "London", "iata_code": "LON"},
    "time_zone": "Europe/London",
}

_AIRPORT_JFK = {
    "id": "arp_jfk_us",
    "iata_code": "JFK",
    "name": "John F. Kennedy International Airport",
    "city": {"name": "New York", "iata_code": "NYC"},
    "time_zone": "America/New_York",
}

_BRITISH_AIRWAYS = {
    "id": "arl_ba_gb",
    "iata_code": "BA",
    "name": "British Airways",
    "logo_symbol_url": "https://assets.duffel.com/img/airlines/for-light-background/full-color-logo/BA.svg",
}

_SAMPLE_OFFER = {
    "id": TEST_OFFER_ID,
    "live_mode": False,
    "total_amount": "299.99",
    "total_currency": "USD",
    "slices": [
        {
            "id": "sli_test_123",
            "origin": _AIRPORT_LHR,
            "destination": _AIRPORT_JFK,
            "departing_at": "2024-07-15T10:00:00Z",
            "arriving_at": "2024-07-15T18:00:00Z",
            "duration": "PT8H",
            "segments": [
                {
                    "id": "seg_test_123",
                    "origin": _AIRPORT_LHR,
                    "destination": _AIRPORT_JFK,
                    "departing_at": "2024-07-15T10:00:00Z",
                    "arriving_at": "2024-07-15T18:00:00Z",
                    "duration": "PT8H",
                    "distance": "5500km",
                    "marketing_carrier": _BRITISH_AIRWAYS,
                    "operating_carrier": _BRITISH_AIRWAYS,
                    "aircraft": {"id": "arc_boeing_777_300er", "iata_code": "77W", "name": "Boeing 777-300ER"},
                    "marketing_carrier_flight_number": "BA117",
                    "operating_carrier_flight_number": "BA117",
                    "origin_terminal": "5",
                    "destination_terminal": "7",
                }
            ],
        }
    ],
    "passengers": [
        {
            "passenger_id": "pas_test_123",
            "baggages": [
                {"type": "carry_on", "quantity": 1, "weight_value": 10, "weight_unit": "kg"},
                {"type": "checked", "quantity": 1, "weight_value": 23, "weight_unit": "kg"},
            ],
        }
    ],
    "services": [],
    "owner": _BRITISH_AIRWAYS,
    "expires_at": "2024-07-15T12:00:00Z",
    "created_at": "2024-07-15T09:00:00Z",
    "updated_at": "2024-07-15T09:00:00Z",
    "partial": False,
    "passenger_identity_documents_required": True,
    "supported_passenger_identity_document_types": ["passport"],
    "conditions": {
        "change_before_departure": {"allowed": True, "penalty_amount": "50.00", "penalty_currency": "USD"},
        "refund_before_departure": {"allowed": False},
    },
}


def sample_offer() -> dict:
    return copy.deepcopy(_SAMPLE_OFFER)
