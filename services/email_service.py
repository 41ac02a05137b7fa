"""
services/email_service.py

Transactional email over SMTP:
- send_single_email: plain text message through the configured relay
- send_verification_email: link to /verify-email/<token>
- send_password_reset_email: link to /reset-password?token=<token>
"""

import logging
import smtplib
from email.message import EmailMessage

from config import (
    EMAIL_FROM,
    EMAIL_FROM_NAME,
    EMAIL_VERIFICATION_TTL_HOURS,
    FRONTEND_BASE_URL,
    RESET_TOKEN_TTL_HOURS,
    SMTP_HOST,
    SMTP_PORT,
    get_smtp_credentials,
)

logger = logging.getLogger(__name__)


class EmailError(RuntimeError):
    pass


# =======================================
# SECTION: LOW LEVEL SEND
# =======================================

def send_single_email(to_email: str, subject: str, body: str) -> None:
    username, password = get_smtp_credentials()
    if not (username and password and EMAIL_FROM):
        raise EmailError("SMTP settings are not fully configured on the server")

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f"{EMAIL_FROM_NAME} <{EMAIL_FROM}>"
    msg["To"] = to_email
    msg.set_content(body)

    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=20) as server:
            server.starttls()
            server.login(username, password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailError(f"Failed to send email: {e}") from e

    logger.info(f"[email] sent subject={subject!r} to={to_email}")


# =======================================
# SECTION: ACCOUNT EMAILS
# =======================================

def send_verification_email(to_email: str, token: str) -> None:
    link = f"{FRONTEND_BASE_URL.rstrip('/')}/verify-email/{token}"
    body = (
        "Welcome to GoJumpingJack!\n\n"
        "Please confirm your email address by opening the link below:\n\n"
        f"{link}\n\n"
        f"This link expires in {EMAIL_VERIFICATION_TTL_HOURS} hours.\n\n"
        "If you did not create an account, you can ignore this email."
    )
    send_single_email(to_email, "Verify your email address", body)


def send_password_reset_email(to_email: str, token: str) -> None:
    link = f"{FRONTEND_BASE_URL.rstrip('/')}/reset-password?token={token}"
    body = (
        "We received a request to reset your GoJumpingJack password.\n\n"
        f"Reset it here: {link}\n\n"
        f"This link expires in {RESET_TOKEN_TTL_HOURS} hour.\n\n"
        "If you did not ask for a reset, no action is needed."
    )
    send_single_email(to_email, "Reset your password", body)
