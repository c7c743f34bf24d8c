from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.models.user import User
from linkup.schemas.user import UserUpdate


async def list_users(db: AsyncSession) -> list[User]:
    res = await db.execute(select(User).order_by(User.id))
    return list(res.scalars())


async def search_users(db: AsyncSession, first_name: str | None, page: int = 1, limit: int = 10) -> tuple[list[User], int]:
    if not first_name:
        raise_error(ErrorCode.BAD_REQUEST, status.HTTP_400_BAD_REQUEST, "Please provide a first name to search.")

    cond = func.lower(User.first_name).contains(first_name.lower(), autoescape=True)
    total = (await db.execute(select(func.count()).select_from(User).where(cond))).scalar_one()
    res = await db.execute(select(User).where(cond).order_by(User.id).offset((page - 1) * limit).limit(limit))
    return list(res.scalars()), total


async def get_user(db: AsyncSession, uid: int) -> User:
    user = await db.get(User, uid)
    if not user:
        raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, f"User with ID {uid} not found.")
    return user


async def update_user(db: AsyncSession, uid: int, data: UserUpdate) -> User:
    user = await get_user(db, uid)
    changes = data.model_dump(exclude_none=True)
    if "email" in changes and changes["email"] != user.email:
        taken = await db.execute(select(User.id).where(User.email == changes["email"]))
        if taken.scalar() is not None:
            raise_error(ErrorCode.EMAIL_ALREADY_REGISTERED, status.HTTP_409_CONFLICT, "Email already in use")
    for k, v in changes.items():
        setattr(user, k, v)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, uid: int) -> str:
    user = await get_user(db, uid)
    await db.delete(user)
    await db.commit()
    return f"User with ID {uid} has been deleted successfully."
