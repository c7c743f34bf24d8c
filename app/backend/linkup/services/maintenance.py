import logging
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.models.refresh_token import RefreshToken
from linkup.models.reset_token import ResetToken

logger = logging.getLogger(__name__)


async def purge_expired_tokens(db: AsyncSession) -> tuple[int, int]:
    """Delete refresh and reset tokens past their expiry. Returns (refresh, reset) counts."""
    now = datetime.now(timezone.utc)
    r1 = await db.execute(delete(RefreshToken).where(RefreshToken.expires_at < now))
    r2 = await db.execute(delete(ResetToken).where(ResetToken.expires_at < now))
    await db.commit()
    logger.info("Purged %s refresh tokens and %s reset tokens", r1.rowcount, r2.rowcount)
    return r1.rowcount, r2.rowcount
