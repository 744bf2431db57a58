from fastapi import APIRouter, Depends

from portal.api.deps import get_current_user
from portal.api.schemas import UserResponse
from portal.models.user import User
from portal.services.id_card import IdCard, build_id_card

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.get("/id-card", response_model=IdCard)
async def id_card(user: User = Depends(get_current_user)):
    return build_id_card(user)
