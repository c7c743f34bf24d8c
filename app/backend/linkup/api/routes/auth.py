from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.api.deps import get_current_user_id
from linkup.db.session import get_db
from linkup.schemas.auth import (
    RegisterIn,
    LoginIn,
    LoginOut,
    TokenPair,
    RefreshIn,
    ForgotPasswordIn,
    ResetPasswordIn,
    ChangePasswordIn,
)
from linkup.schemas.user import UserOut
from linkup.schemas.common import Message
from linkup.schemas.openapi import error_responses
from linkup.services import auth as auth_service
from linkup.services import tokens as token_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED, responses=error_responses(409, 422))
async def register(data: RegisterIn, db: AsyncSession = Depends(get_db)):
    return await auth_service.register(db, data)


@router.post("/login", response_model=LoginOut, responses=error_responses(401, 422, 429))
async def login(data: LoginIn, db: AsyncSession = Depends(get_db)):
    user, tokens = await auth_service.login(db, data.email, data.password)
    return LoginOut(**UserOut.model_validate(user).model_dump(), **tokens.model_dump())


@router.post("/refresh", response_model=TokenPair, responses=error_responses(401, 422))
async def refresh(data: RefreshIn, db: AsyncSession = Depends(get_db)):
    return await token_service.refresh(db, data.token)


@router.put("/change-password", response_model=Message, responses=error_responses(401, 404, 422))
async def change_password(
    payload: ChangePasswordIn,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.change_password(db, user_id, payload.old_password, payload.new_password)
    return {"message": "Password changed"}


@router.post("/forgot-password", response_model=Message, responses=error_responses(422))
async def forgot_password(data: ForgotPasswordIn, background: BackgroundTasks, db: AsyncSession = Depends(get_db)):
    message = await auth_service.forgot_password(db, data.email, background)
    return {"message": message}


@router.put("/reset-password", response_model=Message, responses=error_responses(401, 404, 422))
async def reset_password(data: ResetPasswordIn, db: AsyncSession = Depends(get_db)):
    await auth_service.reset_password(db, data.reset_token, data.new_password)
    return {"message": "Password reset successfully."}


@router.post("/logout", response_model=Message, responses=error_responses(401))
async def logout(user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    await auth_service.logout(db, user_id)
    return {"message": "Logged out"}
