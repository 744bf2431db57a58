from datetime import timedelta

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlmodel import Session

from portal.auth import read_session_id
from portal.config import settings
from portal.database import get_session
from portal.models.user import User
from portal.services.gateway import AuthGateway
from portal.services.guard import Requirement, authorize
from portal.services.sessions import DatabaseSessionStore, SessionStore
from portal.services.user_repository import UserRepository

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)


def get_session_store(session: Session = Depends(get_session)) -> SessionStore:
    return DatabaseSessionStore(session, ttl=timedelta(hours=settings.session_ttl_hours))


def get_gateway(
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthGateway:
    return AuthGateway(users, sessions)


async def get_session_token(cookie: str | None = Depends(session_cookie)) -> str | None:
    if not cookie:
        return None
    return read_session_id(cookie)


async def get_principal(
    token: str | None = Depends(get_session_token),
    gateway: AuthGateway = Depends(get_gateway),
) -> User | None:
    if token is None:
        return None
    return gateway.resolve_principal(token)


async def get_current_user(principal: User | None = Depends(get_principal)) -> User:
    return authorize(principal, Requirement.AUTHENTICATED)


async def get_admin_user(principal: User | None = Depends(get_principal)) -> User:
    return authorize(principal, Requirement.ADMIN)
