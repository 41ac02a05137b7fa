from unittest.mock import patch

import requests

PHOTO = {
    "id": "p1",
    "urls": {"regular": "https://images.unsplash.com/p1"},
    "links": {"download_location": "https://api.unsplash.com/photos/p1/download"},
    "user": {"name": "Jo Doe", "links": {"html": "https://unsplash.com/@jodoe"}},
    "description": "Paris skyline",
    "location": {"city": "Paris", "country": "France"},
    "tags": [{"title": "paris"}],
}


def test_missing_key_is_503(client, monkeypatch):
    monkeypatch.delenv("UNSPLASH_ACCESS_KEY", raising=False)
    resp = client.get("/api/get-unsplash-image", params={"city_name": "Paris"})
    assert resp.status_code == 503


def test_missing_city_is_400(client, monkeypatch):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "key-1234")
    resp = client.get("/api/get-unsplash-image")
    assert resp.status_code == 400


def test_image_found(client, monkeypatch, fake_response):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "key-1234")
    with patch("services.unsplash_service.requests.get") as mock_get:
        mock_get.return_value = fake_response(200, {"total": 1, "results": [PHOTO]})
        resp = client.get(
            "/api/get-unsplash-image",
            params={"city_name": "Paris", "country_code": "FR", "region": "Ile-de-France"},
        )

    body = resp.json()
    assert body["imageUrl"] == "https://images.unsplash.com/p1"
    assert body["downloadLocationUrl"].endswith("/download")
    assert body["photographerProfileUrl"] == (
        "https://unsplash.com/@jodoe?utm_source=gojumpingjack&utm_medium=referral"
    )
    params = mock_get.call_args.kwargs["params"]
    assert params["query"] == "Paris Ile-de-France FR downtown skyline cityscape urban landscape"
    assert params["orientation"] == "landscape"
    assert params["per_page"] == 5
    assert params["content_filter"] == "high"
    assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Client-ID key-1234"


def test_no_results(client, monkeypatch, fake_response):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "key-1234")
    with patch("services.unsplash_service.requests.get", return_value=fake_response(200, {"results": []})):
        resp = client.get("/api/get-unsplash-image", params={"city_name": "Nowhere"})

    assert resp.status_code == 200
    assert resp.json()["imageUrl"] is None
    assert resp.json()["error"] == "No images found"


def test_upstream_status_mapping(client, monkeypatch, fake_response):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "key-1234")
    for upstream, expected in [(401, 503), (403, 429), (500, 500)]:
        with patch("services.unsplash_service.requests.get", return_value=fake_response(upstream, text="nope")):
            resp = client.get("/api/get-unsplash-image", params={"city_name": "Paris"})
        assert resp.status_code == expected, upstream


def test_track_download(client, fake_response):
    resp = client.post("/api/track-unsplash-download", json={})
    assert resp.status_code == 400

    with patch("services.unsplash_service.requests.get", return_value=fake_response(200, {})):
        resp = client.post("/api/track-unsplash-download", json={"downloadLocationUrl": "https://x/download"})
    assert resp.json() == {"success": True}

    with patch("services.unsplash_service.requests.get", return_value=fake_response(500, text="err")):
        resp = client.post("/api/track-unsplash-download", json={"downloadLocationUrl": "https://x/download"})
    assert resp.status_code == 502

    with patch("services.unsplash_service.requests.get", side_effect=requests.ConnectionError("down")):
        resp = client.post("/api/track-unsplash-download", json={"downloadLocationUrl": "https://x/download"})
    assert resp.status_code == 502
