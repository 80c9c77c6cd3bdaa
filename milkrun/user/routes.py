from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id, require_roles
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.schema.full_schema import UserRole
from milkrun.user.models import ProfileUpdateIn
from milkrun.user.repository import get_user_by_id, get_user_by_public_id, list_users
from milkrun.user.services import update_profile
from milkrun.user.utils import serialize_user

user_router = APIRouter()


@user_router.get("/profile")
async def get_profile(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    user = await get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return success_response(serialize_user(user))


@user_router.patch("/profile")
async def patch_profile(payload: ProfileUpdateIn, user_id: int = Depends(current_user_id),
                        session: AsyncSession = Depends(get_session)):
    user = await get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user = await update_profile(session, user, payload.model_dump(exclude_unset=True))
    return success_response(serialize_user(user))


@user_router.get("", dependencies=[require_roles(UserRole.ADMIN)])
async def get_all_users(session: AsyncSession = Depends(get_session)):
    users = await list_users(session)
    return success_response([serialize_user(u) for u in users])


@user_router.get("/{public_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def get_user(public_id: UUID, session: AsyncSession = Depends(get_session)):
    user = await get_user_by_public_id(session, public_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return success_response(serialize_user(user))
