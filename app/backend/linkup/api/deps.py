from fastapi import Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.core.security import user_id_from_access_jwt
from linkup.db.session import get_db
from linkup.models.enums import Role
from linkup.models.user import User
from linkup.core.exceptions import raise_error
from linkup.core.error_codes import ErrorCode

def get_current_user_id(authorization: str | None = Header(default=None)) -> int:
    # Access tokens are self-contained; no database round trip here.
    if not authorization or not authorization.lower().startswith("bearer "):
        raise_error(ErrorCode.TOKEN_MISSING, status.HTTP_401_UNAUTHORIZED, "Missing bearer token")
    user_id = user_id_from_access_jwt(authorization[7:].strip())
    if user_id is None:
        raise_error(ErrorCode.TOKEN_INVALID, status.HTTP_401_UNAUTHORIZED, "Invalid or expired token")
    return user_id

async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise_error(ErrorCode.UNAUTHORIZED, status.HTTP_401_UNAUTHORIZED, "User not found")
    return user

def require_role(*roles: Role):
    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise_error(ErrorCode.FORBIDDEN, status.HTTP_403_FORBIDDEN, "Insufficient role")
        return user
    return _check

require_admin = require_role(Role.admin)
