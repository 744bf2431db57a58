from fastapi import APIRouter, Depends, Response
from starlette.concurrency import run_in_threadpool

from portal.api.deps import get_gateway, get_session_token
from portal.api.schemas import LoginRequest, UserResponse
from portal.auth import sign_session_id
from portal.config import settings
from portal.services.gateway import AuthGateway

router = APIRouter(tags=["auth"])


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        sign_session_id(token),
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    response: Response,
    previous: str | None = Depends(get_session_token),
    gateway: AuthGateway = Depends(get_gateway),
):
    user, token = await run_in_threadpool(gateway.login, body.username, body.password)
    if previous is not None:
        gateway.logout(previous)
    set_session_cookie(response, token)
    return user


@router.post("/logout")
async def logout(
    token: str | None = Depends(get_session_token),
    gateway: AuthGateway = Depends(get_gateway),
):
    if token is not None:
        gateway.logout(token)
    response = Response(status_code=200)
    response.delete_cookie(settings.session_cookie_name)
    return response
