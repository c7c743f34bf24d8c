# Re-export Base and ensure all models are imported so metadata is complete
from linkup.db.session import Base  # provides Base.metadata

# Import models here so Alembic can discover them via Base.metadata
from linkup.models.user import User  # noqa: F401
from linkup.models.refresh_token import RefreshToken  # noqa: F401
from linkup.models.reset_token import ResetToken  # noqa: F401
from linkup.models.follow import Follower, FollowRequest  # noqa: F401
from linkup.models.post import Post  # noqa: F401
