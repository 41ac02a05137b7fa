"""routers/users.py - Authenticated profile read and update."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from db import SessionLocal
from routers.auth import validation_error_response
from schemas.users import ProfileUpdate, UserProfile
from services.auth_service import get_current_user
from services.user_service import apply_profile_fields, get_user_by_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/user/profile")
def get_profile(current: Dict[str, str] = Depends(get_current_user)):
    db = SessionLocal()
    try:
        user = get_user_by_id(db, current["id"])
        if not user:
            return JSONResponse({"error": "User not found"}, status_code=404)
        profile = UserProfile.from_user(user)
    finally:
        db.close()

    return {"profile": profile.model_dump(mode="json")}


@router.put("/api/user/profile")
def update_profile(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current: Dict[str, str] = Depends(get_current_user),
):
    try:
        form = ProfileUpdate(**(payload or {}))
    except ValidationError as e:
        return validation_error_response(e)

    db = SessionLocal()
    try:
        user = get_user_by_id(db, current["id"])
        if not user:
            return JSONResponse({"error": "User not found"}, status_code=404)
        apply_profile_fields(user, form)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[profile] update failed user_id={current['id']}: {e}")
        return JSONResponse({"error": "Failed to update profile"}, status_code=500)
    finally:
        db.close()

    logger.info(f"[profile] updated user_id={current['id']}")
    return {"success": True}
