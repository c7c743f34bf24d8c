import logging
import os

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import AppException, raise_error
from linkup.models.post import Post
from linkup.models.user import User
from linkup.schemas.post import PostOut
from linkup.schemas.profile import ProfileOut, ProfileUpdate
from linkup.schemas.user import UserOut
from linkup.services.storage import ObjectStorage

logger = logging.getLogger(__name__)


def _discard(path: str | None) -> None:
    if path and os.path.exists(path):
        os.remove(path)


async def get_profile(db: AsyncSession, user_id: int) -> ProfileOut:
    user = await db.get(User, user_id)
    if not user:
        raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, "User not found")

    res = await db.execute(
        select(Post).where(Post.user_id == user_id).order_by(Post.pinned.desc(), Post.created_at.desc(), Post.id.desc())
    )
    posts = [PostOut.model_validate(p) for p in res.scalars()]
    return ProfileOut(**UserOut.model_validate(user).model_dump(), posts=posts)


async def edit_profile(
    db: AsyncSession,
    user_id: int,
    data: ProfileUpdate,
    staged_path: str | None,
    storage: ObjectStorage,
) -> User:
    """Apply profile edits and, when a picture was staged locally, push it to storage.

    The staged file is always removed: after a successful upload, and on any
    failure along the way.
    """
    try:
        user = await db.get(User, user_id)
        if not user:
            raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, "User not found")

        if data.email and data.email != user.email:
            taken = await db.execute(select(User.id).where(User.email == data.email))
            if taken.scalar() is not None:
                raise_error(ErrorCode.EMAIL_ALREADY_REGISTERED, status.HTTP_409_CONFLICT, "Email already in use")

        if staged_path:
            uploaded = await storage.upload(staged_path)
            _discard(staged_path)
            user.profile_picture = uploaded["secure_url"]

        for k, v in data.model_dump(exclude_none=True).items():
            setattr(user, k, v)
        await db.commit()
        await db.refresh(user)
        return user
    except AppException:
        _discard(staged_path)
        raise
    except Exception as exc:
        _discard(staged_path)
        await db.rollback()
        logger.exception("Profile update failed for user %s", user_id)
        raise AppException(
            error_code=ErrorCode.PROFILE_UPDATE_FAILED,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            user_message="Error in edit profile",
        ) from exc
