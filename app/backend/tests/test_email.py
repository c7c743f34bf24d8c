from __future__ import annotations

import logging

from linkup.core.config import settings
from linkup.services import email as email_service


def test_reset_link_uses_frontend_base(monkeypatch):
    monkeypatch.setattr(settings, "FRONTEND_BASE_URL", "https://app.example.org/")

    assert email_service.reset_link("abc") == "https://app.example.org/reset-password?token=abc"


async def test_disabled_email_is_logged_not_sent(monkeypatch, caplog):
    monkeypatch.setattr(settings, "EMAIL_ENABLED", False)

    def _boom(*args, **kwargs):
        raise AssertionError("SMTP must not be used")

    monkeypatch.setattr(email_service, "_deliver", _boom)

    with caplog.at_level(logging.INFO, logger="linkup.services.email"):
        await email_service.send_password_reset_email("jane@example.com", "tok123")

    assert "jane@example.com" in caplog.text
    assert "reset-password?token=tok123" in caplog.text


async def test_smtp_failure_is_logged(monkeypatch, caplog):
    monkeypatch.setattr(settings, "EMAIL_ENABLED", True)
    monkeypatch.setattr(settings, "SMTP_HOST", "mail.internal")

    def _refuse(*args, **kwargs):
        raise ConnectionRefusedError("no route")

    monkeypatch.setattr(email_service, "_deliver", _refuse)

    await email_service.send_email("jane@example.com", "Hi", "body")

    assert "Failed to send email" in caplog.text
