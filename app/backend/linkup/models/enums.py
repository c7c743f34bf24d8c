import enum

class Role(str, enum.Enum):
    admin = "admin"
    user = "user"

class PostStatus(str, enum.Enum):
    draft = "draft"
    published = "published"
