from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.config import settings
from linkup.core.security import gen_slug
from linkup.models.reset_token import ResetToken


async def create_reset_token(db: AsyncSession, user_id: int) -> ResetToken:
    # earlier tokens for the same user stay valid until they expire
    rt = ResetToken(
        user_id=user_id,
        token=gen_slug(48),
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=settings.RESET_TOKEN_MINUTES),
    )
    db.add(rt)
    await db.commit()
    return rt


async def find_valid_reset_token(db: AsyncSession, token: str) -> ResetToken | None:
    now = datetime.now(timezone.utc)
    res = await db.execute(select(ResetToken).where(ResetToken.token == token, ResetToken.expires_at >= now))
    return res.scalar()
