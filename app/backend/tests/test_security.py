"""Tests for password hashing and access-token helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from linkup.core.config import settings
from linkup.core.security import (
    create_access_jwt,
    decode_access_jwt,
    gen_refresh_token,
    gen_slug,
    hash_password,
    user_id_from_access_jwt,
    verify_password,
)


def test_hash_is_not_plaintext_and_verifies():
    hashed = hash_password("J1Pass123")

    assert hashed != "J1Pass123"
    assert verify_password("J1Pass123", hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_roundtrips_user_id_without_storage():
    token = create_access_jwt(42)

    assert user_id_from_access_jwt(token) == 42
    claims = decode_access_jwt(token)
    assert claims["type"] == "access"
    assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_MINUTES * 60


def test_expired_access_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {"sub": "1", "type": "access", "iat": int(past.timestamp()), "exp": int((past + timedelta(hours=1)).timestamp())},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
    )

    assert user_id_from_access_jwt(token) is None


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"sub": "1", "type": "access"}, "not-the-secret", algorithm=settings.JWT_ALG)

    assert decode_access_jwt(token) is None


def test_non_access_token_type_is_rejected():
    token = jwt.encode({"sub": "1", "type": "refresh"}, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

    assert user_id_from_access_jwt(token) is None
    assert user_id_from_access_jwt("garbage") is None


def test_generated_tokens_are_unique_and_sized():
    assert len(gen_slug(48)) == 64
    assert gen_slug() != gen_slug()
    assert gen_refresh_token() != gen_refresh_token()
