import logging
from typing import NamedTuple

from portal.auth import dummy_password_record, verify_password
from portal.errors import InvalidCredentials
from portal.models.user import User, is_admin
from portal.services.sessions import SessionStore
from portal.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


class Login(NamedTuple):
    user: User
    token: str


class AuthGateway:
    """Turns credentials into sessions and sessions back into principals."""

    def __init__(self, users: UserRepository, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    def authenticate(self, username: str, password: str) -> User:
        user = self.users.get_by_username(username)
        if user is None:
            # Same cost as a wrong password so unknown usernames are not revealed.
            verify_password(password, dummy_password_record())
            logger.warning(f"Rejected login for {username!r}")
            raise InvalidCredentials()
        if not verify_password(password, user.password):
            logger.warning(f"Rejected login for {username!r}")
            raise InvalidCredentials()
        return user

    def login(self, username: str, password: str) -> Login:
        user = self.authenticate(username, password)
        return Login(user=user, token=self.establish(user))

    def establish(self, user: User) -> str:
        return self.sessions.create(user.id)

    def resolve_principal(self, token: str) -> User | None:
        user_id = self.sessions.resolve(token)
        if user_id is None:
            return None
        # Always re-read the row so role and identity changes apply immediately.
        return self.users.get_by_id(user_id)

    def logout(self, token: str) -> None:
        self.sessions.destroy(token)

    def revoke_user(self, user_id: int) -> None:
        self.sessions.purge_user(user_id)

    @staticmethod
    def is_admin(user: User) -> bool:
        return is_admin(user)
