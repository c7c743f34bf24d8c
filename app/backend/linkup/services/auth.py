import logging

from fastapi import BackgroundTasks, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.config import settings
from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.core.rate_limit import LoginThrottle
from linkup.core.security import hash_password, verify_password
from linkup.models.user import User
from linkup.schemas.auth import RegisterIn, TokenPair
from linkup.services.email import send_password_reset_email
from linkup.services.password_reset import create_reset_token, find_valid_reset_token
from linkup.services.tokens import issue_tokens, revoke_refresh_token

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If user exists, they will receive an email"


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar()


async def register(db: AsyncSession, data: RegisterIn) -> User:
    if await get_user_by_email(db, data.email):
        raise_error(ErrorCode.EMAIL_ALREADY_REGISTERED, status.HTTP_409_CONFLICT, "User already exists")

    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password_hash=hash_password(data.password),
        profile_picture="",
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def login(db: AsyncSession, email: str, password: str) -> tuple[User, TokenPair]:
    throttle = LoginThrottle(email) if settings.LOGIN_THROTTLE_ENABLED else None
    if throttle:
        retry_after = await throttle.retry_after()
        if retry_after is not None:
            raise_error(
                ErrorCode.LOGIN_BLOCKED,
                status.HTTP_429_TOO_MANY_REQUESTS,
                user_message="Too many attempts. Try later.",
                details={"retry_after_seconds": retry_after},
            )

    user = await get_user_by_email(db, email)
    # unknown email and wrong password must stay indistinguishable
    if not user or not verify_password(password, user.password_hash):
        if throttle:
            await throttle.record_failure()
        raise_error(ErrorCode.INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    if throttle:
        await throttle.clear()

    tokens = await issue_tokens(db, user.id)
    logger.info("User %s logged in", user.id)
    return user, tokens


async def change_password(db: AsyncSession, user_id: int, old_password: str, new_password: str) -> None:
    user = await db.get(User, user_id)
    if not user:
        raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, "User not found")

    if not verify_password(old_password, user.password_hash):
        raise_error(ErrorCode.INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED, "Wrong credentials")

    user.password_hash = hash_password(new_password)
    await db.commit()
    logger.info("User %s changed password", user_id)


async def forgot_password(db: AsyncSession, email: str, background: BackgroundTasks) -> str:
    user = await get_user_by_email(db, email)
    if user:
        rt = await create_reset_token(db, user.id)
        background.add_task(send_password_reset_email, user.email, rt.token)
        logger.info("Issued password reset token for user %s", user.id)
    # same answer either way, do not reveal existence
    return FORGOT_PASSWORD_MESSAGE


async def reset_password(db: AsyncSession, token: str, new_password: str) -> None:
    rt = await find_valid_reset_token(db, token)
    if not rt:
        raise_error(ErrorCode.PASSWORD_RESET_INVALID, status.HTTP_401_UNAUTHORIZED, "Invalid link")

    user = await db.get(User, rt.user_id)
    if not user:
        raise_error(ErrorCode.USER_NOT_FOUND, status.HTTP_404_NOT_FOUND, "User not found")

    user.password_hash = hash_password(new_password)
    await db.commit()
    logger.info("User %s reset password", user.id)


async def logout(db: AsyncSession, user_id: int) -> None:
    await revoke_refresh_token(db, user_id)
    logger.info("User %s logged out", user_id)
