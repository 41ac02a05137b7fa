"""
config.py

Single source of truth for:
- Environment variable reads
- Auth / token lifetimes
- Environment validation at startup

Secrets that tests need to swap (Duffel tokens, JWT secret, cron secret) are
read at call time through the small helpers at the bottom of this file.
"""

import logging
import os
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


# =====================================================================
# SECTION: ENV VARS
# =====================================================================

APP_ENV = os.getenv("APP_ENV", "development").lower().strip()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper().strip()

# Duffel
DUFFEL_API_BASE = "https://api.duffel.com"
DUFFEL_VERSION = "v2"
DUFFEL_TIMEOUT_SECONDS = 45

# Supabase (Postgres connection string goes in DATABASE_URL)
SUPABASE_URL = os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL")

# Unsplash
UNSPLASH_API_BASE = "https://api.unsplash.com"
UNSPLASH_UTM = "?utm_source=gojumpingjack&utm_medium=referral"

# Travelpayouts (cheap price calendar)
TRAVELPAYOUTS_API_BASE = "https://api.travelpayouts.com/aviasales/v3/prices_for_dates"

# SMTP / transactional email
SMTP_HOST = os.getenv("SMTP_HOST", "mail-eu.smtp2go.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "2525"))
EMAIL_FROM = os.getenv("EMAIL_FROM", "noreply@gojumpingjack.com")
EMAIL_FROM_NAME = "GoJumpingJack"

FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "https://www.gojumpingjack.com")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Auth
DEFAULT_JWT_SECRET = "your-secret-key"
JWT_ALGORITHM = "HS256"
AUTH_COOKIE_NAME = "auth_token"
AUTH_TOKEN_TTL_DAYS = 7
RESET_TOKEN_TTL_HOURS = 1
EMAIL_VERIFICATION_TTL_HOURS = 24

# Search defaults
DEFAULT_OFFERS_LIMIT = 15
DEFAULT_OFFERS_SORT = "total_amount"
SEARCH_TIME_WINDOW = {"from": "06:00", "to": "22:00"}


# =====================================================================
# SECTION: ENVIRONMENT VALIDATION
# =====================================================================

REQUIRED_ENV_VARS: List[str] = [
    "DATABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "JWT_SECRET",
]

ENV_SPECIFIC_VARS: Dict[str, List[str]] = {
    "development": ["DUFFEL_TOKEN"],
    "production": ["DUFFEL_TOKEN"],
    "test": [],
}


class ConfigurationError(RuntimeError):
    def __init__(self, message: str, missing_vars: List[str]):
        super().__init__(message)
        self.missing_vars = missing_vars


def validate_environment(throw_on_missing: bool = False) -> dict:
    """
    Check required env vars and a couple of insecure settings.

    Duffel tokens count as present when any of DUFFEL_TOKEN,
    DUFFEL_TEST_TOKEN or DUFFEL_LIVE_TOKEN is set.
    """
    missing: List[str] = []
    warnings: List[str] = []

    for name in REQUIRED_ENV_VARS + ENV_SPECIFIC_VARS.get(APP_ENV, []):
        if name == "DUFFEL_TOKEN":
            if not any(os.getenv(k) for k in ("DUFFEL_TOKEN", "DUFFEL_TEST_TOKEN", "DUFFEL_LIVE_TOKEN")):
                missing.append(name)
            continue
        if not os.getenv(name):
            missing.append(name)

    if get_jwt_secret() == DEFAULT_JWT_SECRET:
        warnings.append("JWT_SECRET is using default value - this is insecure!")

    if APP_ENV == "production" and get_duffel_mode() == "test":
        warnings.append('DUFFEL_MODE is set to "test" in production environment')

    if missing:
        logger.error(f"[env] missing required environment variables: {', '.join(missing)} env={APP_ENV}")
        if throw_on_missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing,
            )

    for w in warnings:
        logger.warning(f"[env] {w} env={APP_ENV}")

    if not missing and not warnings:
        logger.info(f"[env] environment validation passed env={APP_ENV}")

    return {
        "isValid": not missing,
        "missingVars": missing,
        "warnings": warnings,
        "environment": APP_ENV,
    }


# =====================================================================
# SECTION: CALL-TIME SECRET HELPERS
# =====================================================================

def get_duffel_mode() -> str:
    return (os.getenv("DUFFEL_MODE") or "test").lower().strip()


def get_duffel_token() -> Optional[str]:
    """Token for the active DUFFEL_MODE, falling back to DUFFEL_TOKEN."""
    mode = get_duffel_mode()
    if mode == "live":
        token = os.getenv("DUFFEL_LIVE_TOKEN")
    else:
        token = os.getenv("DUFFEL_TEST_TOKEN")
    token = (token or os.getenv("DUFFEL_TOKEN") or "").strip()
    return token or None


def get_jwt_secret() -> str:
    return os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET


def get_bcrypt_rounds() -> int:
    try:
        return int(os.getenv("BCRYPT_ROUNDS", "12"))
    except ValueError:
        return 12


def get_service_role_key() -> Optional[str]:
    return os.getenv("SUPABASE_SERVICE_ROLE_KEY")


def get_unsplash_key() -> Optional[str]:
    return os.getenv("UNSPLASH_ACCESS_KEY")


def get_travelpayouts_token() -> Optional[str]:
    return os.getenv("TRAVELPAYOUTS_TOKEN")


def get_smtp_credentials() -> tuple:
    return os.getenv("SMTP_USERNAME"), os.getenv("SMTP_PASSWORD")


def cookie_secure() -> bool:
    return APP_ENV == "production"
