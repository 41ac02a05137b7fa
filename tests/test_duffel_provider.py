from unittest.mock import patch

import pytest
import requests

from providers import duffel
from providers.duffel import (
    DuffelError,
    build_offer_request_payload,
    create_offer_request,
    create_order,
    get_seat_maps,
    list_all_airports,
    list_offers,
    search_flights,
)
from schemas.search import FlightSearchParams


def make_params(**overrides):
    base = {
        "origin": "LHR",
        "destination": "JFK",
        "departureDate": "2030-05-01",
        "passengers": {"adults": 2, "children": 1, "infants": 1},
        "cabinClass": "business",
    }
    base.update(overrides)
    return FlightSearchParams(**base)


def test_payload_one_way_expands_passengers_and_windows():
    payload = build_offer_request_payload(make_params())
    data = payload["data"]

    assert data["cabin_class"] == "business"
    assert [p["type"] for p in data["passengers"]] == ["adult", "adult", "child", "infant"]
    assert len(data["slices"]) == 1
    outbound = data["slices"][0]
    assert outbound["origin"] == "LHR"
    assert outbound["destination"] == "JFK"
    assert outbound["departure_time"] == {"from": "06:00", "to": "22:00"}
    assert outbound["arrival_time"] == {"from": "06:00", "to": "22:00"}


def test_payload_round_trip_mirrors_return_slice():
    payload = build_offer_request_payload(make_params(returnDate="2030-05-10"))
    slices = payload["data"]["slices"]

    assert len(slices) == 2
    assert slices[1]["origin"] == "JFK"
    assert slices[1]["destination"] == "LHR"
    assert slices[1]["departure_date"] == "2030-05-10"


def test_create_offer_request_does_not_wait_for_offers(fake_response):
    with patch.object(duffel.requests, "request") as mock_request:
        mock_request.return_value = fake_response(201, {"data": {"id": "orq_123"}})
        offer_request_id = create_offer_request(make_params())

    assert offer_request_id == "orq_123"
    args, kwargs = mock_request.call_args
    assert args[0] == "POST"
    assert args[1].endswith("/air/offer_requests")
    assert kwargs["params"] == {"return_offers": "false"}
    assert kwargs["headers"]["Duffel-Version"] == "v2"
    assert kwargs["headers"]["Authorization"].startswith("Bearer ")


def test_list_offers_sends_cursor_and_sort(fake_response):
    body = {"data": [{"id": "off_1"}], "meta": {"after": "g2", "limit": 5}}
    with patch.object(duffel.requests, "request", return_value=fake_response(200, body)) as mock_request:
        page = list_offers("orq_123", sort="-total_duration", limit=5, after="g1")

    assert page == {"data": [{"id": "off_1"}], "meta": {"after": "g2", "limit": 5}}
    params = mock_request.call_args.kwargs["params"]
    assert params == {"offer_request_id": "orq_123", "limit": 5, "after": "g1", "sort": "-total_duration"}


def test_list_offers_omits_empty_sort(fake_response):
    with patch.object(duffel.requests, "request", return_value=fake_response(200, {"data": []})) as mock_request:
        list_offers("orq_123", sort=None)

    assert "sort" not in mock_request.call_args.kwargs["params"]


def test_list_offers_rejects_bad_arguments():
    with pytest.raises(ValueError):
        list_offers("")
    with pytest.raises(ValueError):
        list_offers("orq_123", limit="15")


def test_upstream_error_carries_first_message(fake_response):
    body = {"errors": [{"code": "invalid_request", "message": "Origin is not a valid airport"}]}
    with patch.object(duffel.requests, "request", return_value=fake_response(422, body)):
        with pytest.raises(DuffelError) as exc_info:
            list_offers("orq_123")

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "Origin is not a valid airport"
    assert exc_info.value.errors[0]["code"] == "invalid_request"


def test_network_failure_becomes_502():
    with patch.object(duffel.requests, "request", side_effect=requests.ConnectionError("boom")):
        with pytest.raises(DuffelError) as exc_info:
            list_offers("orq_123")

    assert exc_info.value.status_code == 502


def test_missing_token_raises(monkeypatch):
    for name in ("DUFFEL_TOKEN", "DUFFEL_TEST_TOKEN", "DUFFEL_LIVE_TOKEN"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(DuffelError) as exc_info:
        list_offers("orq_123")

    assert exc_info.value.status_code == 500
    assert "token" in exc_info.value.message


def test_live_mode_uses_live_token(monkeypatch, fake_response):
    monkeypatch.setenv("DUFFEL_MODE", "live")
    monkeypatch.setenv("DUFFEL_LIVE_TOKEN", "duffel_live_abc")

    with patch.object(duffel.requests, "request", return_value=fake_response(200, {"data": []})) as mock_request:
        list_offers("orq_123")

    assert mock_request.call_args.kwargs["headers"]["Authorization"] == "Bearer duffel_live_abc"


def test_search_flights_rewrites_rate_limit_message():
    with patch.object(duffel, "create_offer_request", side_effect=DuffelError(429, "rate_limit_exceeded")):
        with pytest.raises(DuffelError) as exc_info:
            search_flights(make_params())

    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "Too many requests. Please try again in a few minutes."


def test_seat_maps_not_found_is_empty(fake_response):
    with patch.object(duffel.requests, "request", return_value=fake_response(404, {"errors": [{"message": "Not found"}]})):
        assert get_seat_maps("off_123") == []


def test_list_all_airports_follows_cursor(fake_response):
    pages = [
        fake_response(200, {"data": [{"iata_code": "LHR"}], "meta": {"after": "c1"}}),
        fake_response(200, {"data": [{"iata_code": "JFK"}], "meta": {"after": None}}),
    ]
    with patch.object(duffel.requests, "request", side_effect=pages) as mock_request:
        airports = list_all_airports(page_size=1)

    assert [a["iata_code"] for a in airports] == ["LHR", "JFK"]
    assert mock_request.call_args_list[1].kwargs["params"] == {"limit": 1, "after": "c1"}


def test_create_order_sends_instant_order(fake_response):
    passengers = [{"id": "pas_1", "given_name": "Ada", "family_name": "Lovelace"}]
    with patch.object(duffel.requests, "request") as mock_request:
        mock_request.return_value = fake_response(201, {"data": {"id": "ord_1", "booking_reference": "ABC123"}})
        order = create_order("off_123", passengers)

    assert order == {"id": "ord_1", "booking_reference": "ABC123"}
    args, kwargs = mock_request.call_args
    assert args[0] == "POST"
    assert args[1].endswith("/air/orders")
    assert kwargs["json"] == {
        "data": {"type": "instant", "selected_offers": ["off_123"], "passengers": passengers}
    }
