"""Tests for the authentication service layer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import BackgroundTasks
from sqlalchemy import select

from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import AppException
from linkup.models.refresh_token import RefreshToken
from linkup.models.reset_token import ResetToken
from linkup.schemas.auth import RegisterIn
from linkup.services import auth as auth_service
from linkup.services.email import send_password_reset_email
from linkup.services.password_reset import create_reset_token


async def test_register_stores_hash_and_defaults(db):
    user = await auth_service.register(
        db, RegisterIn(first_name="Jane", last_name="Doe", email="jane@example.com", password="J1Pass123")
    )

    assert user.id is not None
    assert user.password_hash != "J1Pass123"
    assert user.role.value == "user"
    assert user.is_private is False
    assert user.profile_picture == ""


async def test_register_duplicate_email_conflicts(db, make_user):
    await make_user("jane@example.com")

    with pytest.raises(AppException) as exc:
        await auth_service.register(
            db, RegisterIn(first_name="Jane", last_name="Doe", email="jane@example.com", password="another1")
        )
    assert exc.value.status_code == 409
    assert exc.value.user_message == "User already exists"


async def test_login_issues_tokens_and_persists_refresh(db, make_user):
    created = await make_user("jane@example.com", "J1Pass123")

    user, tokens = await auth_service.login(db, "jane@example.com", "J1Pass123")

    assert user.id == created.id
    row = (await db.execute(select(RefreshToken).where(RefreshToken.user_id == user.id))).scalar_one()
    assert row.token == tokens.refresh_token


async def test_login_failures_are_indistinguishable(db, make_user):
    await make_user("jane@example.com", "J1Pass123")

    with pytest.raises(AppException) as wrong_password:
        await auth_service.login(db, "jane@example.com", "nope")
    with pytest.raises(AppException) as unknown_email:
        await auth_service.login(db, "ghost@example.com", "J1Pass123")

    for exc in (wrong_password, unknown_email):
        assert exc.value.status_code == 401
        assert exc.value.error_code == ErrorCode.INVALID_CREDENTIALS
        assert exc.value.user_message == "Invalid credentials"


async def test_change_password_swaps_credentials(db, make_user):
    user = await make_user("jane@example.com", "J1Pass123")

    await auth_service.change_password(db, user.id, "J1Pass123", "J2Pass456")

    await auth_service.login(db, "jane@example.com", "J2Pass456")
    with pytest.raises(AppException):
        await auth_service.login(db, "jane@example.com", "J1Pass123")


async def test_change_password_with_wrong_old_password(db, make_user):
    user = await make_user("jane@example.com", "J1Pass123")

    with pytest.raises(AppException) as exc:
        await auth_service.change_password(db, user.id, "bad-guess", "J2Pass456")
    assert exc.value.status_code == 401
    assert exc.value.user_message == "Wrong credentials"


async def test_change_password_for_missing_user(db):
    with pytest.raises(AppException) as exc:
        await auth_service.change_password(db, 999, "a", "b")
    assert exc.value.status_code == 404


async def test_forgot_password_schedules_mail_only_for_known_users(db, make_user):
    user = await make_user("jane@example.com")

    known = BackgroundTasks()
    unknown = BackgroundTasks()
    msg_known = await auth_service.forgot_password(db, "jane@example.com", known)
    msg_unknown = await auth_service.forgot_password(db, "ghost@example.com", unknown)

    assert msg_known == msg_unknown == auth_service.FORGOT_PASSWORD_MESSAGE
    assert len(unknown.tasks) == 0
    assert len(known.tasks) == 1
    task = known.tasks[0]
    assert task.func is send_password_reset_email
    email, token = task.args
    assert email == "jane@example.com"

    row = (await db.execute(select(ResetToken).where(ResetToken.token == token))).scalar_one()
    assert row.user_id == user.id


async def test_reset_password_with_valid_token(db, make_user):
    user = await make_user("jane@example.com", "J1Pass123")
    rt = await create_reset_token(db, user.id)

    await auth_service.reset_password(db, rt.token, "Fresh789")

    await auth_service.login(db, "jane@example.com", "Fresh789")


async def test_reset_token_is_reusable_until_expiry(db, make_user):
    user = await make_user("jane@example.com")
    first = await create_reset_token(db, user.id)
    await create_reset_token(db, user.id)

    await auth_service.reset_password(db, first.token, "Fresh789")
    await auth_service.reset_password(db, first.token, "Again789")

    await auth_service.login(db, "jane@example.com", "Again789")


async def test_reset_password_with_expired_token(db, make_user):
    user = await make_user("jane@example.com", "J1Pass123")
    db.add(
        ResetToken(
            user_id=user.id,
            token="stale",
            expires_at=datetime.now(timezone.utc) - timedelta(seconds=1),
        )
    )
    await db.commit()

    with pytest.raises(AppException) as exc:
        await auth_service.reset_password(db, "stale", "Fresh789")
    assert exc.value.status_code == 401
    assert exc.value.user_message == "Invalid link"

    # password unchanged
    await auth_service.login(db, "jane@example.com", "J1Pass123")


async def test_logout_revokes_refresh_token(db, make_user):
    await make_user("jane@example.com", "J1Pass123")
    user, _ = await auth_service.login(db, "jane@example.com", "J1Pass123")

    await auth_service.logout(db, user.id)

    rows = (await db.execute(select(RefreshToken).where(RefreshToken.user_id == user.id))).scalars().all()
    assert rows == []
