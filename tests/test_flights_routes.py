from unittest.mock import patch

import requests

from providers.duffel import DuffelError, build_passengers

SEARCH_BODY = {
    "origin": "LHR",
    "destination": "JFK",
    "departureDate": "2030-05-01",
    "passengers": {"adults": 1},
    "cabinClass": "economy",
}


# =====================================================================
# SECTION: INITIATE SEARCH
# =====================================================================

def test_initiate_search_missing_fields_is_400(client):
    for field in SEARCH_BODY:
        body = {k: v for k, v in SEARCH_BODY.items() if k != field}
        with patch("routers.flights.create_offer_request") as mock_create:
            resp = client.post("/api/flights/initiate-search", json=body)
        assert resp.status_code == 400, field
        assert resp.json() == {"message": "Missing required parameters"}
        mock_create.assert_not_called()


def test_initiate_search_empty_body_is_400(client):
    resp = client.post("/api/flights/initiate-search")
    assert resp.status_code == 400


def test_initiate_search_returns_pending_request(client):
    with patch("routers.flights.create_offer_request", return_value="orq_abc") as mock_create:
        resp = client.post("/api/flights/initiate-search", json=SEARCH_BODY)

    assert resp.status_code == 200
    assert resp.json() == {"offer_request_id": "orq_abc", "status": "pending"}
    params = mock_create.call_args.args[0]
    assert params.origin == "LHR"
    assert params.passengers.adults == 1


def test_initiate_search_upstream_failure_is_500(client):
    with patch("routers.flights.create_offer_request", side_effect=DuffelError(422, "Bad airport")):
        resp = client.post("/api/flights/initiate-search", json=SEARCH_BODY)

    assert resp.status_code == 500
    assert resp.json() == {"message": "Bad airport"}


# =====================================================================
# SECTION: RESULTS POLLING
# =====================================================================

def test_results_requires_offer_request_id(client):
    resp = client.get("/api/flights/results")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Missing offer_request_id"}


def test_results_rejects_non_numeric_limit(client):
    resp = client.get("/api/flights/results", params={"offer_request_id": "orq_1", "limit": "lots"})
    assert resp.status_code == 400


def test_results_pending_when_no_offers_yet(client):
    page = {"data": [], "meta": {"after": None}}
    with patch("routers.flights.list_offers", return_value=page):
        resp = client.get("/api/flights/results", params={"offer_request_id": "orq_1"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "pending", "offers": [], "meta": {"after": None}}


def test_results_complete_with_offers_and_defaults(client):
    page = {"data": [{"id": "off_1"}, {"id": "off_2"}], "meta": {"after": "g1", "limit": 15}}
    with patch("routers.flights.list_offers", return_value=page) as mock_list:
        resp = client.get("/api/flights/results", params={"offer_request_id": "orq_1"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "complete"
    assert [o["id"] for o in body["offers"]] == ["off_1", "off_2"]
    assert body["meta"]["after"] == "g1"
    assert mock_list.call_args.kwargs["limit"] == 15
    assert mock_list.call_args.kwargs["sort"] == "total_amount"


def test_results_passes_cursor_through(client):
    with patch("routers.flights.list_offers", return_value={"data": [], "meta": {}}) as mock_list:
        client.get(
            "/api/flights/results",
            params={"offer_request_id": "orq_1", "limit": "5", "after": "g1", "sort": "-total_amount"},
        )

    assert mock_list.call_args.kwargs == {"sort": "-total_amount", "limit": 5, "after": "g1"}


def test_results_upstream_failure_is_502(client):
    with patch("routers.flights.list_offers", side_effect=DuffelError(500, "Duffel is down")):
        resp = client.get("/api/flights/results", params={"offer_request_id": "orq_1"})

    assert resp.status_code == 502
    body = resp.json()
    assert body["message"] == "Duffel is down"
    assert body["details"]["status"] == 500


# =====================================================================
# SECTION: OFFERS AND SEAT MAPS
# =====================================================================

def test_test_offer_fixture(client):
    resp = client.get("/api/flights/offers/test")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == "off_test_123456789"


def test_offer_details_test_id_skips_duffel(client):
    with patch("routers.flights.get_offer") as mock_get:
        resp = client.get("/api/flights/offers/off_test_123456789")

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    mock_get.assert_not_called()


def test_offer_details_rejects_bad_id(client):
    resp = client.get("/api/flights/offers/not-an-offer")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid offer ID format"


def test_offer_details_expired_offer_is_404(client):
    err = DuffelError(404, "Not found", [{"code": "offer_not_found"}])
    with patch("routers.flights.get_offer", side_effect=err):
        resp = client.get("/api/flights/offers/off_0000AbC")

    assert resp.status_code == 404
    assert "expired" in resp.json()["error"]


def test_offer_details_success(client):
    with patch("routers.flights.get_offer", return_value={"id": "off_0000AbC", "total_amount": "100.00"}):
        resp = client.get("/api/flights/offers/off_0000AbC")

    assert resp.json() == {"success": True, "data": {"id": "off_0000AbC", "total_amount": "100.00"}}


def test_seat_map_unavailable_is_not_an_error(client):
    with patch("routers.flights.get_seat_maps", return_value=[]):
        resp = client.get("/api/flights/offers/off_0000AbC/seat_map")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["available"] is False
    assert body["data"] == []


def test_seat_map_available(client):
    with patch("routers.flights.get_seat_maps", return_value=[{"id": "sea_1"}]):
        resp = client.get("/api/flights/offers/off_0000AbC/seat_map")

    body = resp.json()
    assert body["available"] is True
    assert body["data"] == [{"id": "sea_1"}]


# =====================================================================
# SECTION: CACHED PRICES
# =====================================================================

def test_cached_prices_requires_route(client):
    resp = client.get("/api/flights", params={"origin": "LHR"})
    assert resp.status_code == 400


def test_cached_prices_falls_back_without_dates(client, fake_response):
    responses = [
        fake_response(200, {"success": True, "data": []}),
        fake_response(200, {"success": True, "data": [{"price": 321}]}),
    ]
    with patch("providers.travelpayouts.requests.get", side_effect=responses) as mock_get:
        resp = client.get(
            "/api/flights",
            params={"origin": "LHR", "destination": "JFK", "departure_at": "2030-05-01"},
        )

    body = resp.json()
    assert body["exactMatch"] is False
    assert body["data"] == [{"price": 321}]
    assert "departure_at" not in mock_get.call_args_list[1].kwargs["params"]


def test_cached_prices_upstream_failure_is_502(client):
    with patch("providers.travelpayouts.requests.get", side_effect=requests.ConnectionError("down")):
        resp = client.get("/api/flights", params={"origin": "LHR", "destination": "JFK"})

    assert resp.status_code == 502


# =====================================================================
# SECTION: REQUEST BODY SHAPE
# =====================================================================

def test_initiate_search_accepts_null_child_and_infant_counts(client):
    body = dict(SEARCH_BODY, passengers={"adults": 1, "children": None, "infants": None})
    with patch("routers.flights.create_offer_request", return_value="orq_nulls") as mock_create:
        resp = client.post("/api/flights/initiate-search", json=body)

    assert resp.status_code == 200
    assert resp.json() == {"offer_request_id": "orq_nulls", "status": "pending"}
    params = mock_create.call_args.args[0]
    assert build_passengers(params) == [{"type": "adult"}]


def test_initiate_search_non_object_body_is_400(client):
    resp = client.post("/api/flights/initiate-search", json=["x"])
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid request"}


def test_initiate_search_malformed_json_is_400(client):
    resp = client.post(
        "/api/flights/initiate-search",
        content="{bad",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid JSON body"}
