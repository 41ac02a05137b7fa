"""
services/auth_service.py

Credential helpers shared by the auth and profile routes:
- Password hashing and verification (passlib + bcrypt)
- Session JWT issue / verify (python-jose, HS256)
- auth_token cookie handling
- Reset and email verification tokens
- get_current_user dependency (cookie first, then Authorization: Bearer)
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Optional

from fastapi import HTTPException, Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from config import (
    AUTH_COOKIE_NAME,
    AUTH_TOKEN_TTL_DAYS,
    EMAIL_VERIFICATION_TTL_HOURS,
    JWT_ALGORITHM,
    RESET_TOKEN_TTL_HOURS,
    cookie_secure,
    get_bcrypt_rounds,
    get_jwt_secret,
)

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    pass


# =====================================================================
# SECTION: PASSWORDS
# =====================================================================

def _pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_bcrypt_rounds(),
    )


def hash_password(password: str) -> str:
    return _pwd_context().hash(password)


def compare_passwords(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return _pwd_context().verify(password, hashed_password)
    except (ValueError, TypeError) as e:
        # malformed stored hash
        logger.error(f"[auth] password verify failed: {e}")
        return False


# =====================================================================
# SECTION: SESSION TOKENS
# =====================================================================

def generate_token(user_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(days=AUTH_TOKEN_TTL_DAYS))
    claims = {
        "id": str(user_id),
        "email": email,
        "exp": expire,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(claims, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Dict[str, str]:
    """Decode a session token into {"id", "email"}; raises InvalidTokenError."""
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError("Invalid token") from e

    user_id = payload.get("id")
    email = payload.get("email")
    if not user_id or not email:
        raise InvalidTokenError("Invalid token")
    return {"id": user_id, "email": email}


def get_auth_token(request: Request) -> Optional[str]:
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("authorization") or ""
    if header.startswith("Bearer "):
        return header[7:].strip() or None
    return None


def set_auth_token(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=cookie_secure(),
        samesite="lax",
        max_age=AUTH_TOKEN_TTL_DAYS * 24 * 60 * 60,
        path="/",
    )


def remove_auth_token(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE_NAME, path="/")


def get_current_user(request: Request) -> Dict[str, str]:
    """FastAPI dependency: verified session claims or 401."""
    token = get_auth_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return verify_token(token)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Unauthorized")


# =====================================================================
# SECTION: ONE-TIME TOKENS
# =====================================================================

def generate_reset_token() -> str:
    return secrets.token_urlsafe(24)


def get_reset_token_expiry() -> datetime:
    return datetime.utcnow() + timedelta(hours=RESET_TOKEN_TTL_HOURS)


def generate_email_verification_token() -> str:
    return secrets.token_urlsafe(32)


def get_email_verification_token_expiry() -> datetime:
    return datetime.utcnow() + timedelta(hours=EMAIL_VERIFICATION_TTL_HOURS)
