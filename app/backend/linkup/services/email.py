"""Outbound mail. Delivery is best-effort and never fails the request that triggered it."""
import asyncio
import logging
import smtplib
from email.message import EmailMessage

from linkup.core.config import settings

logger = logging.getLogger(__name__)

PLACEHOLDER_HOSTS = {"smtp.example.com", ""}


def _mail_disabled() -> bool:
    return not settings.EMAIL_ENABLED or not settings.SMTP_HOST or settings.SMTP_HOST in PLACEHOLDER_HOSTS


def _deliver(message: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=float(settings.SMTP_TIMEOUT_SECONDS)) as smtp:
        if settings.SMTP_TLS:
            smtp.starttls()
        if settings.SMTP_USER:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(message)


async def send_email(to_email: str, subject: str, body: str) -> None:
    if _mail_disabled():
        logger.info("Mail disabled, not sending %r to %s:\n%s", subject, to_email, body)
        return

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = settings.MAIL_FROM
    message["To"] = to_email
    message.set_content(body)

    try:
        await asyncio.to_thread(_deliver, message)
    except (OSError, smtplib.SMTPException):
        logger.exception("Failed to send email %r to %s", subject, to_email)
    else:
        logger.info("Sent %r to %s", subject, to_email)


def reset_link(token: str) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/reset-password?token={token}"


async def send_password_reset_email(email: str, token: str) -> None:
    body = (
        f"You requested a password reset. The link below is valid for {settings.RESET_TOKEN_MINUTES} minutes:\n\n"
        f"{reset_link(token)}\n\n"
        "If you didn't ask for this, you can ignore this email."
    )
    await send_email(email, "Reset your LinkUp password", body)
