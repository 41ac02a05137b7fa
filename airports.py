"""
airports.py

Static airport reference data for the search form's airport picker.
Loaded once at import, queried by linear scan.

Multi-airport cities (Orlando, New York, Los Angeles) are grouped so the
picker can offer "All airports" for the city as well as each airport.
"""

from collections import OrderedDict
from typing import Dict, List

from schemas.airports import Airport, AirportSearchResult


def _a(code, name, city, state, country, lat, lon) -> Airport:
    return Airport(
        code=code,
        name=name,
        city=city,
        state=state,
        country=country,
        latitude=lat,
        longitude=lon,
    )


AIRPORTS: List[Airport] = [
    # Orlando
    _a("MCO", "Orlando International Airport", "Orlando", "Florida", "United States", 28.4312, -81.3081),
    _a("SFB", "Orlando Sanford International Airport", "Orlando", "Florida", "United States", 28.7776, -81.2375),
    _a("DAB", "Daytona Beach International Airport", "Orlando", "Florida", "United States", 29.1799, -81.0581),
    # New York
    _a("JFK", "John F. Kennedy International Airport", "New York", "New York", "United States", 40.6413, -73.7781),
    _a("LGA", "LaGuardia Airport", "New York", "New York", "United States", 40.7769, -73.874),
    _a("EWR", "Newark Liberty International Airport", "New York", "New York", "United States", 40.6895, -74.1745),
    # Los Angeles
    _a("LAX", "Los Angeles International Airport", "Los Angeles", "California", "United States", 33.9416, -118.4085),
    _a("BUR", "Bob Hope Airport", "Los Angeles", "California", "United States", 34.2006, -118.3587),
    _a("ONT", "Ontario International Airport", "Los Angeles", "California", "United States", 34.0559, -117.6011),
    # Single airport cities
    _a("MIA", "Miami International Airport", "Miami", "Florida", "United States", 25.7959, -80.287),
    _a("SEA", "Seattle-Tacoma International Airport", "Seattle", "Washington", "United States", 47.4502, -122.3088),
]


def get_airports_by_city(city: str) -> List[Airport]:
    needle = (city or "").strip().lower()
    return [a for a in AIRPORTS if a.city.lower() == needle]


def search_airports(query: str) -> List[Airport]:
    """Case-insensitive substring match on name, city or code; an empty query matches everything."""
    term = (query or "").strip().lower()
    return [
        a for a in AIRPORTS
        if term in a.name.lower() or term in a.city.lower() or term in a.code.lower()
    ]


def search_grouped(query: str) -> List[AirportSearchResult]:
    """
    Matches as picker rows: one "city" row per matched city that has more
    than one airport (carrying all of that city's airports), then one
    "airport" row per matched airport.
    """
    matches = search_airports(query)
    if not matches:
        return []

    by_city: Dict[str, List[Airport]] = OrderedDict()
    for a in matches:
        by_city.setdefault(a.city, [])

    results: List[AirportSearchResult] = []
    for city in by_city:
        city_airports = get_airports_by_city(city)
        if len(city_airports) > 1:
            first = city_airports[0]
            results.append(AirportSearchResult(
                type="city",
                code=first.code,
                name=f"{city} (All airports)",
                city=city,
                state=first.state,
                country=first.country,
                airports=city_airports,
            ))

    for a in matches:
        results.append(AirportSearchResult(
            type="airport",
            code=a.code,
            name=a.name,
            city=a.city,
            state=a.state,
            country=a.country,
        ))

    return results
