from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from linkup.schemas.post import PostOut
from linkup.schemas.user import UserOut

class ProfileOut(UserOut):
    posts: list[PostOut] = []

class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    is_private: bool | None = None

class FollowRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    requester_id: int
    target_id: int
    created_at: datetime
