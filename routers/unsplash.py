"""routers/unsplash.py - City background images and Unsplash download tracking."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from services.unsplash_service import UnsplashError, get_city_image, track_download

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/get-unsplash-image")
def get_unsplash_image(
    city_name: Optional[str] = None,
    country_code: Optional[str] = None,
    region: Optional[str] = None,
):
    logger.info(f"[get-unsplash-image] city={city_name} country={country_code} region={region}")
    try:
        return get_city_image(city_name or "", country_code, region)
    except UnsplashError as e:
        return JSONResponse(e.to_dict(), status_code=e.status_code)


@router.post("/api/track-unsplash-download")
def track_unsplash_download(payload: Optional[Dict[str, Any]] = Body(default=None)):
    download_location_url = (payload or {}).get("downloadLocationUrl")
    try:
        track_download(download_location_url)
    except UnsplashError as e:
        return JSONResponse(e.to_dict(), status_code=e.status_code)
    return {"success": True}
