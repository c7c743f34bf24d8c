"""Access/refresh token issuance and refresh-token rotation.

Access tokens are self-contained JWTs. Refresh tokens are opaque strings whose
only meaning is the row in ``refresh_tokens``; each user has at most one such
row, which is overwritten on every login and every successful refresh.
"""
import logging
from datetime import datetime, timedelta, timezone

from fastapi import status
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.config import settings
from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.core.security import create_access_jwt, gen_refresh_token
from linkup.models.refresh_token import RefreshToken
from linkup.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


def _refresh_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_DAYS)


async def store_refresh_token(db: AsyncSession, user_id: int, token: str) -> None:
    """Keyed replace: update the user's row if present, else insert one. Does not commit."""
    res = await db.execute(select(RefreshToken).where(RefreshToken.user_id == user_id))
    row = res.scalar()
    if row:
        row.token = token
        row.expires_at = _refresh_expiry()
    else:
        db.add(RefreshToken(user_id=user_id, token=token, expires_at=_refresh_expiry()))


async def issue_tokens(db: AsyncSession, user_id: int) -> TokenPair:
    access_token = create_access_jwt(user_id)
    refresh_token = gen_refresh_token()
    await store_refresh_token(db, user_id, refresh_token)
    await db.commit()
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


async def refresh(db: AsyncSession, token_value: str) -> TokenPair:
    now = datetime.now(timezone.utc)
    res = await db.execute(
        select(RefreshToken.user_id).where(RefreshToken.token == token_value, RefreshToken.expires_at >= now)
    )
    user_id = res.scalar()
    if user_id is None:
        logger.warning("Rejected refresh attempt with unknown or expired token")
        raise_error(ErrorCode.REFRESH_TOKEN_INVALID, status.HTTP_401_UNAUTHORIZED, "Invalid or expired refresh token")

    new_refresh = gen_refresh_token()
    # compare-and-swap on the old value: a concurrent rotation leaves nothing to update
    result = await db.execute(
        update(RefreshToken)
        .where(RefreshToken.token == token_value)
        .values(token=new_refresh, expires_at=_refresh_expiry())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.warning("Refresh token for user %s was rotated concurrently", user_id)
        raise_error(ErrorCode.REFRESH_TOKEN_INVALID, status.HTTP_401_UNAUTHORIZED, "Invalid or expired refresh token")
    await db.commit()

    logger.info("Rotated refresh token for user %s", user_id)
    return TokenPair(access_token=create_access_jwt(user_id), refresh_token=new_refresh)


async def revoke_refresh_token(db: AsyncSession, user_id: int) -> None:
    await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
    await db.commit()
