"""routers/auth.py - Signup, login, logout, password reset and email verification."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from db import SessionLocal
from models import User
from schemas.users import (
    LoginRequest,
    PasswordReset,
    PasswordResetRequest,
    PublicUser,
    ResendVerificationRequest,
    SignupStep1,
    SignupStep2,
)
from services.auth_service import (
    compare_passwords,
    generate_email_verification_token,
    generate_reset_token,
    generate_token,
    get_email_verification_token_expiry,
    get_reset_token_expiry,
    hash_password,
    remove_auth_token,
    set_auth_token,
)
from services.email_service import EmailError, send_password_reset_email, send_verification_email
from services.user_service import apply_profile_fields, get_user_by_email, get_user_by_id, normalize_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")


def validation_error_response(e: ValidationError) -> JSONResponse:
    """400 with the first validation message up front and the rest under details."""
    errors = e.errors(include_url=False, include_context=False, include_input=False)
    first = errors[0]["msg"] if errors else "Invalid request"
    if first.startswith("Value error, "):
        first = first[len("Value error, "):]
    return JSONResponse({"error": first, "details": errors}, status_code=400)


# =====================================================================
# SECTION: SIGNUP
# =====================================================================

@router.post("/signup")
def signup(payload: Optional[Dict[str, Any]] = Body(default=None)):
    payload = payload or {}
    step = payload.get("step")
    data = payload.get("data") or {}
    if not isinstance(data, dict):
        return JSONResponse({"error": "Invalid request"}, status_code=400)

    if step == 1:
        return _signup_step1(data)
    if step == 2:
        return _signup_step2(payload.get("userId"), data)
    return JSONResponse({"error": "Invalid signup step"}, status_code=400)


def _signup_step1(data: dict) -> JSONResponse:
    try:
        form = SignupStep1(**data)
    except ValidationError as e:
        return validation_error_response(e)

    email = normalize_email(form.email)
    db = SessionLocal()
    try:
        if get_user_by_email(db, email):
            return JSONResponse({"error": "Email already registered"}, status_code=400)

        verification_token = generate_email_verification_token()
        user = User(
            email=email,
            password_hash=hash_password(form.password),
            site_rewards_tokens=0,
            email_verified=False,
            email_verification_token=verification_token,
            email_verification_token_expires_at=get_email_verification_token_expiry(),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        user_id, user_email = user.id, user.email
    except Exception as e:
        db.rollback()
        logger.error(f"[signup] failed to create user email={email}: {e}")
        return JSONResponse({"error": "Failed to create account"}, status_code=500)
    finally:
        db.close()

    try:
        send_verification_email(user_email, verification_token)
    except EmailError as e:
        # account stays usable; the user can ask for a new link
        logger.error(f"[signup] verification email failed user_id={user_id}: {e}")

    logger.info(f"[signup] created user_id={user_id}")
    response = JSONResponse({"success": True, "userId": user_id})
    set_auth_token(response, generate_token(user_id, user_email))
    return response


def _signup_step2(user_id: Optional[str], data: dict) -> JSONResponse:
    if not user_id:
        return JSONResponse({"error": "Missing userId"}, status_code=400)
    if not isinstance(user_id, str):
        return JSONResponse({"error": "Invalid request"}, status_code=400)
    try:
        form = SignupStep2(**data)
    except ValidationError as e:
        return validation_error_response(e)

    db = SessionLocal()
    try:
        user = get_user_by_id(db, user_id)
        if not user:
            return JSONResponse({"error": "User not found"}, status_code=404)
        apply_profile_fields(user, form)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[signup] profile step failed user_id={user_id}: {e}")
        return JSONResponse({"error": "Failed to create account"}, status_code=500)
    finally:
        db.close()

    return JSONResponse({"success": True})


# =====================================================================
# SECTION: LOGIN / LOGOUT
# =====================================================================

@router.post("/login")
def login(payload: Optional[Dict[str, Any]] = Body(default=None)):
    try:
        form = LoginRequest(**(payload or {}))
    except ValidationError as e:
        return validation_error_response(e)

    db = SessionLocal()
    try:
        user = get_user_by_email(db, form.email)
        if not user or not compare_passwords(form.password, user.password_hash):
            logger.info("[login] rejected credentials")
            return JSONResponse({"error": "Invalid email or password"}, status_code=401)
        public = PublicUser.from_user(user)
    finally:
        db.close()

    response = JSONResponse({"user": public.model_dump(mode="json")})
    set_auth_token(response, generate_token(public.id, public.email))
    logger.info(f"[login] user_id={public.id}")
    return response


@router.post("/logout")
def logout():
    response = JSONResponse({"success": True})
    remove_auth_token(response)
    return response


# =====================================================================
# SECTION: PASSWORD RESET
# =====================================================================

@router.post("/request-password-reset")
def request_password_reset(payload: Optional[Dict[str, Any]] = Body(default=None)):
    try:
        form = PasswordResetRequest(**(payload or {}))
    except ValidationError as e:
        return validation_error_response(e)

    db = SessionLocal()
    try:
        user = get_user_by_email(db, form.email)
        if not user:
            # same answer for unknown addresses
            return JSONResponse({"success": True})

        token = generate_reset_token()
        user.reset_password_token = token
        user.reset_password_expires = get_reset_token_expiry()
        db.commit()
        email = user.email
    except Exception as e:
        db.rollback()
        logger.error(f"[password-reset] failed to store token: {e}")
        return JSONResponse({"error": "Failed to process password reset request"}, status_code=500)
    finally:
        db.close()

    try:
        send_password_reset_email(email, token)
    except EmailError as e:
        logger.error(f"[password-reset] email failed: {e}")

    return JSONResponse({"success": True})


@router.post("/reset-password")
def reset_password(payload: Optional[Dict[str, Any]] = Body(default=None)):
    try:
        form = PasswordReset(**(payload or {}))
    except ValidationError as e:
        return validation_error_response(e)

    db = SessionLocal()
    try:
        user = (
            db.query(User)
            .filter(
                User.reset_password_token == form.token,
                User.reset_password_expires > datetime.utcnow(),
            )
            .first()
        )
        if not user:
            return JSONResponse({"error": "Invalid or expired reset token"}, status_code=400)

        user.password_hash = hash_password(form.password)
        user.reset_password_token = None
        user.reset_password_expires = None
        db.commit()
        logger.info(f"[password-reset] password updated user_id={user.id}")
    except Exception as e:
        db.rollback()
        logger.error(f"[password-reset] failed: {e}")
        return JSONResponse({"error": "Failed to reset password"}, status_code=500)
    finally:
        db.close()

    return JSONResponse({"success": True})


# =====================================================================
# SECTION: EMAIL VERIFICATION
# =====================================================================

@router.get("/verify-email/{token}")
def verify_email(token: str):
    logger.info(f"[verify-email] attempt token={token[:8]}...")

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email_verification_token == token).first()
        if not user:
            return JSONResponse({"error": "Invalid or expired verification link"}, status_code=400)

        if user.email_verified:
            return JSONResponse({"message": "Email already verified", "alreadyVerified": True})

        expires_at = user.email_verification_token_expires_at
        if expires_at is None or datetime.utcnow() > expires_at:
            logger.warning(f"[verify-email] expired token user_id={user.id}")
            return JSONResponse({"error": "Verification link has expired"}, status_code=400)

        user.email_verified = True
        user.email_verification_token = None
        user.email_verification_token_expires_at = None
        db.commit()

        body = {
            "message": "Email successfully verified",
            "success": True,
            "user": {
                "id": user.id,
                "email": user.email,
                "firstName": user.first_name,
                "lastName": user.last_name,
            },
        }
    except Exception as e:
        db.rollback()
        logger.error(f"[verify-email] failed: {e}")
        return JSONResponse({"error": "Failed to verify email"}, status_code=500)
    finally:
        db.close()

    logger.info(f"[verify-email] verified user_id={body['user']['id']}")
    return JSONResponse(body)


@router.post("/resend-verification")
def resend_verification(payload: Optional[Dict[str, Any]] = Body(default=None)):
    try:
        form = ResendVerificationRequest(**(payload or {}))
    except ValidationError:
        return JSONResponse({"error": "Invalid email address"}, status_code=400)

    db = SessionLocal()
    try:
        user = get_user_by_email(db, form.email)
        if not user:
            logger.warning("[resend-verification] unknown email")
            return JSONResponse({"success": True})

        if user.email_verified:
            return JSONResponse({"error": "Email is already verified"}, status_code=400)

        token = generate_email_verification_token()
        user.email_verification_token = token
        user.email_verification_token_expires_at = get_email_verification_token_expiry()
        db.commit()
        email, user_id = user.email, user.id
    except Exception as e:
        db.rollback()
        logger.error(f"[resend-verification] failed: {e}")
        return JSONResponse({"error": "Failed to resend verification email"}, status_code=500)
    finally:
        db.close()

    try:
        send_verification_email(email, token)
    except EmailError as e:
        logger.error(f"[resend-verification] email failed user_id={user_id}: {e}")
        return JSONResponse({"error": "Failed to send verification email"}, status_code=500)

    return JSONResponse({"success": True})
