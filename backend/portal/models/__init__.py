from portal.models.session import SessionRecord
from portal.models.user import ADMIN_BADGE_NUMBER, Role, User, is_admin

__all__ = [
    "ADMIN_BADGE_NUMBER",
    "Role",
    "SessionRecord",
    "User",
    "is_admin",
]
