from enum import Enum

from portal.errors import Forbidden, Unauthorized
from portal.models.user import User, is_admin


class Requirement(str, Enum):
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


def authorize(principal: User | None, requirement: Requirement) -> User:
    if principal is None:
        raise Unauthorized()
    match requirement:
        case Requirement.AUTHENTICATED:
            return principal
        case Requirement.ADMIN:
            if not is_admin(principal):
                raise Forbidden()
            return principal
