"""
services/unsplash_service.py

City background images from Unsplash search, plus the download tracking
ping Unsplash's API guidelines require when an image is displayed.
"""

import logging
from typing import Optional

import requests

from config import UNSPLASH_API_BASE, UNSPLASH_UTM, get_unsplash_key

logger = logging.getLogger(__name__)

UNSPLASH_TIMEOUT_SECONDS = 15
QUERY_SUFFIX = "downtown skyline cityscape urban landscape"


class UnsplashError(Exception):
    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


def _access_key() -> str:
    key = get_unsplash_key()
    if not key:
        logger.error("[unsplash] missing UNSPLASH_ACCESS_KEY")
        raise UnsplashError(
            503,
            "Server configuration error: Missing Unsplash API key",
            "The server is not properly configured to access the Unsplash API",
        )
    return key


def build_query(city_name: str, country_code: Optional[str] = None, region: Optional[str] = None) -> str:
    parts = [city_name]
    if region:
        parts.append(region)
    if country_code:
        parts.append(country_code)
    parts.append(QUERY_SUFFIX)
    return " ".join(parts)


def get_city_image(city_name: str, country_code: Optional[str] = None, region: Optional[str] = None) -> dict:
    key = _access_key()
    if not city_name:
        raise UnsplashError(
            400,
            "Missing required city_name parameter",
            "The city_name parameter is required to search for images",
        )

    query = build_query(city_name, country_code, region)
    logger.info(f"[unsplash] search query={query!r} key_prefix={key[:4]}...")

    try:
        resp = requests.get(
            f"{UNSPLASH_API_BASE}/search/photos",
            params={
                "query": query,
                "orientation": "landscape",
                "per_page": 5,
                "content_filter": "high",
            },
            headers={"Authorization": f"Client-ID {key}", "Accept-Version": "v1"},
            timeout=UNSPLASH_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"[unsplash] search request failed: {e}")
        raise UnsplashError(502, "Unsplash request failed", str(e))

    if resp.status_code == 401:
        raise UnsplashError(
            503,
            "Unsplash API authentication failed",
            "The server is not properly configured to access the Unsplash API",
        )
    if resp.status_code == 403:
        raise UnsplashError(
            429,
            "Unsplash API rate limit exceeded",
            "The server has exceeded its rate limit for the Unsplash API",
        )
    if resp.status_code >= 400:
        logger.error(f"[unsplash] status={resp.status_code} body={resp.text[:500]}")
        raise UnsplashError(resp.status_code, f"Unsplash API error: {resp.reason}", resp.text)

    data = resp.json() or {}
    results = data.get("results") or []
    logger.info(f"[unsplash] total={data.get('total')} results={len(results)}")

    if not results:
        return {
            "imageUrl": None,
            "error": "No images found",
            "details": f"No images found for query: {query}",
        }

    photo = results[0]
    user = photo.get("user") or {}
    return {
        "imageUrl": (photo.get("urls") or {}).get("regular"),
        "downloadLocationUrl": (photo.get("links") or {}).get("download_location"),
        "photographerName": user.get("name"),
        "photographerProfileUrl": f"{(user.get('links') or {}).get('html', '')}{UNSPLASH_UTM}",
        "unsplashUrl": f"https://unsplash.com/{UNSPLASH_UTM}",
        "imageDetails": {
            "description": photo.get("description") or photo.get("alt_description"),
            "location": photo.get("location"),
            "tags": [t.get("title") for t in (photo.get("tags") or [])],
        },
    }


def track_download(download_location_url: str) -> None:
    if not download_location_url:
        raise UnsplashError(400, "No downloadLocationUrl provided")

    try:
        resp = requests.get(
            download_location_url,
            headers={"Authorization": f"Client-ID {get_unsplash_key() or ''}"},
            timeout=UNSPLASH_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"[unsplash] download tracking failed: {e}")
        raise UnsplashError(502, "Unsplash download tracking failed")

    if not resp.ok:
        logger.warning(f"[unsplash] download tracking status={resp.status_code}")
        raise UnsplashError(502, "Unsplash download tracking failed")
