"""
middleware.py

Presence-only auth gate for account pages and the user API. A request to a
protected prefix passes when it carries an auth_token cookie or a Bearer
header; handlers verify the token itself.
"""

import logging
from typing import Callable, Optional, Sequence

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from config import AUTH_COOKIE_NAME

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = ("/account", "/api/user")

PUBLIC_PREFIXES = (
    "/api/auth/signup",
    "/api/auth/login",
    "/api/auth/request-password-reset",
    "/api/auth/reset-password",
    "/api/auth/verify-email",
    "/api/auth/resend-verification",
    "/api/duffel/airlines",
    "/login",
    "/signup",
    "/forgot-password",
    "/reset-password",
    "/verify-email",
    "/verify-email-required",
)


class AuthGateMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        protected_prefixes: Optional[Sequence[str]] = None,
        public_prefixes: Optional[Sequence[str]] = None,
        login_path: str = "/login",
    ):
        super().__init__(app)
        self.protected_prefixes = tuple(protected_prefixes or PROTECTED_PREFIXES)
        self.public_prefixes = tuple(public_prefixes or PUBLIC_PREFIXES)
        self.login_path = login_path

    def is_protected(self, path: str) -> bool:
        if path.startswith(self.public_prefixes):
            return False
        return path.startswith(self.protected_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not self.is_protected(path):
            return await call_next(request)

        if request.cookies.get(AUTH_COOKIE_NAME):
            return await call_next(request)

        if (request.headers.get("authorization") or "").startswith("Bearer "):
            return await call_next(request)

        logger.info(f"[auth-gate] no credentials path={path}")
        if path.startswith("/api/"):
            return JSONResponse({"error": "Unauthorized"}, status_code=401)
        return RedirectResponse(url=self.login_path, status_code=307)
