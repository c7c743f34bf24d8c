from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.models.post import Post
from linkup.schemas.post import PostCreate, PostUpdate


async def list_posts(db: AsyncSession) -> list[Post]:
    res = await db.execute(select(Post).order_by(Post.created_at.desc(), Post.id.desc()))
    return list(res.scalars())


async def get_post(db: AsyncSession, post_id: int) -> Post:
    post = await db.get(Post, post_id)
    if not post:
        raise_error(ErrorCode.POST_NOT_FOUND, status.HTTP_404_NOT_FOUND, "Post not found")
    return post


async def _owned_post(db: AsyncSession, post_id: int, user_id: int) -> Post:
    # someone else's post is reported exactly like a missing one
    res = await db.execute(select(Post).where(Post.id == post_id, Post.user_id == user_id))
    post = res.scalar()
    if not post:
        raise_error(ErrorCode.POST_NOT_FOUND, status.HTTP_404_NOT_FOUND, "Post not found")
    return post


async def create_post(db: AsyncSession, user_id: int, data: PostCreate) -> Post:
    post = Post(
        user_id=user_id,
        title=data.title,
        content=data.content,
        status=data.status,
        media_url=data.media_url or [],
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


async def edit_post(db: AsyncSession, post_id: int, user_id: int, data: PostUpdate) -> Post:
    post = await _owned_post(db, post_id, user_id)
    for k, v in data.model_dump(exclude_none=True).items():
        setattr(post, k, v)
    await db.commit()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post_id: int, user_id: int) -> None:
    post = await _owned_post(db, post_id, user_id)
    await db.delete(post)
    await db.commit()
