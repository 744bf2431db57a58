from fastapi import APIRouter, Depends, Response
from starlette.concurrency import run_in_threadpool

from portal.api.auth import set_session_cookie
from portal.api.deps import get_admin_user, get_gateway, get_user_repository
from portal.api.schemas import (
    AdminRegisterRequest,
    CredentialsRequest,
    MessageResponse,
    ModeratorCreateRequest,
    ModeratorUpdateRequest,
    UserResponse,
)
from portal.auth import hash_password
from portal.models.user import User
from portal.services.gateway import AuthGateway
from portal.services.user_repository import UserRepository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register_admin(
    body: AdminRegisterRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    gateway: AuthGateway = Depends(get_gateway),
):
    data = body.model_dump()
    data["password"] = await run_in_threadpool(hash_password, body.password)
    admin = users.create_admin(data)
    set_session_cookie(response, gateway.establish(admin))
    return admin


@router.post("/moderators", response_model=UserResponse, status_code=201)
async def create_moderator(
    body: ModeratorCreateRequest,
    users: UserRepository = Depends(get_user_repository),
    _admin: User = Depends(get_admin_user),
):
    data = body.model_dump()
    data["password"] = await run_in_threadpool(hash_password, body.password)
    return users.create_moderator(data)


@router.get("/moderators", response_model=list[UserResponse])
async def list_moderators(
    users: UserRepository = Depends(get_user_repository),
    _admin: User = Depends(get_admin_user),
):
    return users.list_moderators()


@router.patch("/moderators/{moderator_id}", response_model=UserResponse)
async def update_moderator(
    moderator_id: int,
    body: ModeratorUpdateRequest,
    users: UserRepository = Depends(get_user_repository),
    _admin: User = Depends(get_admin_user),
):
    data = body.model_dump(exclude_unset=True)
    if "password" in data:
        data["password"] = await run_in_threadpool(hash_password, data["password"])
    return users.update_moderator(moderator_id, data)


@router.put("/moderators/{moderator_id}/credentials", response_model=UserResponse)
async def replace_credentials(
    moderator_id: int,
    body: CredentialsRequest,
    users: UserRepository = Depends(get_user_repository),
    _admin: User = Depends(get_admin_user),
):
    password = await run_in_threadpool(hash_password, body.password)
    return users.update_moderator_credentials(moderator_id, body.username, password)


@router.delete("/moderators/{moderator_id}", response_model=MessageResponse)
async def delete_moderator(
    moderator_id: int,
    users: UserRepository = Depends(get_user_repository),
    gateway: AuthGateway = Depends(get_gateway),
    _admin: User = Depends(get_admin_user),
):
    users.delete_moderator(moderator_id)
    gateway.revoke_user(moderator_id)
    return MessageResponse(message="Moderator deleted")
