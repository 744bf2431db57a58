from enum import Enum

from sqlmodel import Field, SQLModel

ADMIN_BADGE_NUMBER = "ADMIN"


class Role(str, Enum):
    MODERATOR = "moderator"
    ADMIN = "admin"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    password: str  # "<hex key>.<hex salt>", see portal.auth.hash_password
    full_name: str
    role: str = Field(default=Role.MODERATOR.value, index=True)
    badge_number: str = Field(unique=True, index=True)
    profile_image: str | None = None
    designation: str | None = None
    department: str | None = None
    join_date: str | None = None
    contact_info: str | None = None

    @property
    def role_kind(self) -> Role:
        return Role(self.role)


def is_admin(user: User) -> bool:
    match user.role_kind:
        case Role.ADMIN:
            return True
        case Role.MODERATOR:
            return False
