"""Follow relationships and follow requests for private accounts.

Per ordered pair (requester, target) the state is one of ``none``,
``requested`` (a FollowRequest row) or ``following`` (a Follower row).
Public targets go straight from ``none`` to ``following``; private targets
pass through ``requested`` and need the target to accept.
"""
import logging

from fastapi import status
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.models.follow import Follower, FollowRequest
from linkup.models.user import User

logger = logging.getLogger(__name__)


async def _find_request(db: AsyncSession, requester_id: int, target_id: int) -> FollowRequest | None:
    res = await db.execute(
        select(FollowRequest).where(FollowRequest.requester_id == requester_id, FollowRequest.target_id == target_id)
    )
    return res.scalar()


async def _find_edge(db: AsyncSession, follower_id: int, following_id: int) -> Follower | None:
    res = await db.execute(
        select(Follower).where(Follower.follower_id == follower_id, Follower.following_id == following_id)
    )
    return res.scalar()


async def request_to_follow(db: AsyncSession, user_id: int, target_id: int) -> str:
    target = await db.get(User, target_id)
    if not target:
        raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, "User not found")
    if target.id == user_id:
        raise_error(ErrorCode.CANNOT_FOLLOW_SELF, status.HTTP_400_BAD_REQUEST, "You cannot follow yourself.")

    # also covers accounts that went private after the edge was created
    if await _find_edge(db, user_id, target_id):
        raise_error(ErrorCode.ALREADY_FOLLOWING, status.HTTP_400_BAD_REQUEST, "You are already following this user.")

    if not target.is_private:
        # drop any request left over from when the target was private
        await db.execute(
            delete(FollowRequest).where(FollowRequest.requester_id == user_id, FollowRequest.target_id == target_id)
        )
        db.add(Follower(follower_id=user_id, following_id=target_id))
        await db.commit()
        logger.info("User %s now follows %s", user_id, target_id)
        return "You are now following this user."

    if await _find_request(db, user_id, target_id):
        raise_error(ErrorCode.FOLLOW_REQUEST_EXISTS, status.HTTP_400_BAD_REQUEST, "Follow request already sent.")
    db.add(FollowRequest(requester_id=user_id, target_id=target_id))
    await db.commit()
    logger.info("User %s requested to follow %s", user_id, target_id)
    return "Follow request sent."


async def accept_follow_request(db: AsyncSession, requester_id: int, target_id: int) -> str:
    req = await _find_request(db, requester_id, target_id)
    if not req:
        raise_error(ErrorCode.FOLLOW_REQUEST_NOT_FOUND, status.HTTP_400_BAD_REQUEST, "No follow request found.")

    # promote the request: both writes land in one commit or not at all
    try:
        if not await _find_edge(db, requester_id, target_id):
            db.add(Follower(follower_id=requester_id, following_id=target_id))
        await db.delete(req)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    logger.info("User %s accepted follow request from %s", target_id, requester_id)
    return "Follow request accepted."


async def cancel_follow_request(db: AsyncSession, requester_id: int, target_id: int) -> str:
    req = await _find_request(db, requester_id, target_id)
    if not req:
        raise_error(ErrorCode.FOLLOW_REQUEST_NOT_FOUND, status.HTTP_400_BAD_REQUEST, "No follow request found.")
    await db.delete(req)
    await db.commit()
    logger.info("Follow request %s -> %s canceled", requester_id, target_id)
    return "Follow request canceled successfully."


async def unfollow_user(db: AsyncSession, target_id: int, user_id: int) -> str:
    await db.execute(delete(Follower).where(Follower.follower_id == user_id, Follower.following_id == target_id))
    await db.commit()
    return "Unfollowed successfully."


async def list_follow_requests(db: AsyncSession, target_id: int) -> list[FollowRequest]:
    res = await db.execute(
        select(FollowRequest)
        .where(FollowRequest.target_id == target_id)
        .order_by(FollowRequest.created_at.desc(), FollowRequest.id.desc())
    )
    return list(res.scalars())
