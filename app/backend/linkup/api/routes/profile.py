import asyncio
import os
import secrets
import shutil
import time

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import EmailStr
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.api.deps import get_current_user_id
from linkup.core.config import settings
from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import raise_error
from linkup.db.session import get_db
from linkup.schemas.common import Message
from linkup.schemas.openapi import error_responses
from linkup.schemas.profile import FollowRequestOut, ProfileOut, ProfileUpdate
from linkup.schemas.user import UserOut
from linkup.services import follows as follow_service
from linkup.services import profile as profile_service
from linkup.services.storage import ObjectStorage, get_storage

router = APIRouter(prefix="/profile", tags=["profile"])

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}


def _write_staged(source, path: str) -> None:
    with open(path, "wb") as out:
        shutil.copyfileobj(source, out)


async def _stage_upload(upload: UploadFile) -> str:
    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise_error(ErrorCode.INVALID_FILE_TYPE, status.HTTP_400_BAD_REQUEST, "Only image files are allowed!")

    staging_dir = os.path.join(settings.UPLOAD_DIR, "profile_pictures")
    os.makedirs(staging_dir, exist_ok=True)
    path = os.path.join(staging_dir, f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}")
    await asyncio.to_thread(_write_staged, upload.file, path)
    return path


@router.get("", response_model=ProfileOut, responses=error_responses(401, 404))
async def get_profile(user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return await profile_service.get_profile(db, user_id)


@router.put("", response_model=UserOut, responses=error_responses(400, 401, 404, 409, 422, 500))
async def edit_profile(
    first_name: str | None = Form(default=None),
    last_name: str | None = Form(default=None),
    email: EmailStr | None = Form(default=None),
    is_private: bool | None = Form(default=None),
    profile_picture: UploadFile | None = File(default=None),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    data = ProfileUpdate(first_name=first_name, last_name=last_name, email=email, is_private=is_private)
    staged = await _stage_upload(profile_picture) if profile_picture and profile_picture.filename else None
    return await profile_service.edit_profile(db, user_id, data, staged, storage)


@router.post("/{target_id}/follow", response_model=Message, responses=error_responses(400, 401, 404))
async def request_to_follow(target_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return {"message": await follow_service.request_to_follow(db, user_id, target_id)}


@router.delete("/{target_id}/follow", response_model=Message, responses=error_responses(401))
async def unfollow(target_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return {"message": await follow_service.unfollow_user(db, target_id, user_id)}


@router.delete("/{target_id}/follow-request", response_model=Message, responses=error_responses(400, 401))
async def withdraw_follow_request(
    target_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)
):
    return {"message": await follow_service.cancel_follow_request(db, user_id, target_id)}


@router.get("/follow-requests", response_model=list[FollowRequestOut], responses=error_responses(401))
async def incoming_follow_requests(user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return await follow_service.list_follow_requests(db, user_id)


@router.post("/follow-requests/{requester_id}/accept", response_model=Message, responses=error_responses(400, 401))
async def accept_follow_request(
    requester_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)
):
    # the caller is the private account being followed
    return {"message": await follow_service.accept_follow_request(db, requester_id, user_id)}


@router.delete("/follow-requests/{requester_id}", response_model=Message, responses=error_responses(400, 401))
async def decline_follow_request(
    requester_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)
):
    return {"message": await follow_service.cancel_follow_request(db, requester_id, user_id)}
