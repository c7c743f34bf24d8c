"""Tests for Redis-backed login throttling."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from linkup.core import rate_limit
from linkup.core.config import settings
from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import AppException
from linkup.services import auth as auth_service


@pytest.fixture()
def fake_redis(monkeypatch):
    r = AsyncMock()
    r.exists.return_value = 0
    r.incr.return_value = 1
    r.ttl.return_value = -2
    monkeypatch.setattr(rate_limit, "redis_client", lambda: r)
    monkeypatch.setattr(settings, "LOGIN_THROTTLE_ENABLED", True)
    return r


async def test_blocked_email_gets_429_with_retry_hint(client, make_user, fake_redis):
    await make_user("jane@example.com", "J1Pass123")
    fake_redis.exists.return_value = 1
    fake_redis.ttl.return_value = 120

    r = await client.post("/auth/login", json={"email": "jane@example.com", "password": "J1Pass123"})

    assert r.status_code == 429
    body = r.json()
    assert body["error_code"] == "login_blocked"
    assert body["details"] == {"retry_after_seconds": 120}
    fake_redis.exists.assert_awaited_once_with("login:block:jane@example.com")


async def test_failures_past_limit_set_block(db, make_user, fake_redis, monkeypatch):
    await make_user("jane@example.com", "J1Pass123")
    monkeypatch.setattr(settings, "LOGIN_MAX_ATTEMPTS", 3)
    fake_redis.incr.return_value = 3

    with pytest.raises(AppException) as exc:
        await auth_service.login(db, "Jane@example.com", "wrong")

    assert exc.value.error_code == ErrorCode.INVALID_CREDENTIALS
    fake_redis.set.assert_awaited_once_with("login:block:jane@example.com", "1", ex=settings.LOGIN_BLOCK_SECONDS)


async def test_first_failure_starts_window(db, make_user, fake_redis):
    await make_user("jane@example.com", "J1Pass123")

    with pytest.raises(AppException):
        await auth_service.login(db, "jane@example.com", "wrong")

    fake_redis.expire.assert_awaited_once_with("login:fail:jane@example.com", settings.LOGIN_ATTEMPT_WINDOW_SECONDS)
    fake_redis.set.assert_not_awaited()


async def test_successful_login_clears_failures(db, make_user, fake_redis):
    await make_user("jane@example.com", "J1Pass123")

    await auth_service.login(db, "jane@example.com", "J1Pass123")

    fake_redis.delete.assert_awaited_once_with("login:fail:jane@example.com")


async def test_redis_outage_does_not_block_login(db, make_user, fake_redis):
    await make_user("jane@example.com", "J1Pass123")
    fake_redis.exists.side_effect = RedisConnectionError("down")
    fake_redis.delete.side_effect = RedisConnectionError("down")

    user, tokens = await auth_service.login(db, "jane@example.com", "J1Pass123")

    assert user.email == "jane@example.com"
    assert tokens.access_token
