from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.api.deps import get_current_user_id
from linkup.db.session import get_db
from linkup.schemas.common import Message
from linkup.schemas.post import PostCreate, PostOut, PostUpdate
from linkup.schemas.openapi import error_responses
from linkup.services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"])

@router.get("", response_model=list[PostOut])
async def list_posts(db: AsyncSession = Depends(get_db)):
    return await post_service.list_posts(db)

@router.get("/{post_id}", response_model=PostOut, responses=error_responses(404))
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.get_post(db, post_id)

@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED, responses=error_responses(401, 422))
async def create_post(
    payload: PostCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.create_post(db, user_id, payload)

@router.put("/{post_id}", response_model=PostOut, responses=error_responses(401, 404, 422))
async def edit_post(
    post_id: int,
    payload: PostUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.edit_post(db, post_id, user_id, payload)

@router.delete("/{post_id}", response_model=Message, responses=error_responses(401, 404))
async def delete_post(post_id: int, user_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    await post_service.delete_post(db, post_id, user_id)
    return {"message": "Post deleted"}
