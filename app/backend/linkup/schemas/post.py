from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from linkup.models.enums import PostStatus

class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str
    status: PostStatus = PostStatus.published
    media_url: list[str] | None = None

class PostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = None
    status: PostStatus | None = None
    media_url: list[str] | None = None
    pinned: bool | None = None

class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    status: PostStatus
    media_url: list[str]
    pinned: bool
    created_at: datetime
