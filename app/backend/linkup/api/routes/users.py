from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.api.deps import require_admin
from linkup.db.session import get_db
from linkup.schemas.common import Message
from linkup.schemas.user import UserOut, UserPage, UserUpdate
from linkup.schemas.openapi import error_responses
from linkup.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserOut], dependencies=[Depends(require_admin)], responses=error_responses(401, 403))
async def list_users(db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(db)

@router.get("/search", response_model=UserPage, responses=error_responses(400, 422))
async def search_users(
    first_name: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    items, total = await user_service.search_users(db, first_name, page, limit)
    return UserPage(items=[UserOut.model_validate(u) for u in items], total=total, page=page, limit=limit)

@router.get("/{uid}", response_model=UserOut, responses=error_responses(404))
async def get_user(uid: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user(db, uid)

@router.put("/{uid}", response_model=UserOut, dependencies=[Depends(require_admin)], responses=error_responses(401, 403, 404, 409, 422))
async def update_user(uid: int, payload: UserUpdate, db: AsyncSession = Depends(get_db)):
    return await user_service.update_user(db, uid, payload)

@router.delete("/{uid}", response_model=Message, dependencies=[Depends(require_admin)], responses=error_responses(401, 403, 404))
async def delete_user(uid: int, db: AsyncSession = Depends(get_db)):
    return {"message": await user_service.delete_user(db, uid)}
