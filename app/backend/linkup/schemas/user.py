from pydantic import BaseModel, ConfigDict, EmailStr

from linkup.models.enums import Role

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    first_name: str
    last_name: str
    role: Role
    is_private: bool
    profile_picture: str


class UserUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    role: Role | None = None
    is_private: bool | None = None


class UserPage(BaseModel):
    items: list[UserOut]
    total: int
    page: int
    limit: int
