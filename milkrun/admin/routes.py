from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.admin.models import AdminLoginIn, DeliveryBoyCreateIn
from milkrun.auth.dependencies import require_roles
from milkrun.auth.services import auth_payload, authenticate_password, issue_auth_tokens
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.schema.full_schema import UserRole
from milkrun.user.repository import list_users
from milkrun.user.services import create_user
from milkrun.user.utils import serialize_user
from milkrun.admin.constants import logger

admin_router = APIRouter()


@admin_router.post("/login")
async def admin_login(payload: AdminLoginIn, session: AsyncSession = Depends(get_session)):
    user = await authenticate_password(session, payload.password, email=payload.email)
    if user.role != UserRole.ADMIN.value:
        logger.warning("admin.login.failed", extra={"reason": "not_admin", "user_public_id": str(user.public_id)})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access, refresh = await issue_auth_tokens(session, user)
    logger.info("admin.login.success", extra={"user_public_id": str(user.public_id)})
    return success_response(auth_payload(user, access, refresh), 200)


@admin_router.post("/delivery-boy", status_code=status.HTTP_201_CREATED,
                   dependencies=[require_roles(UserRole.ADMIN)])
async def create_delivery_boy(payload: DeliveryBoyCreateIn, session: AsyncSession = Depends(get_session)):
    user = await create_user(session, phone=payload.phone, role=UserRole.DELIVERY_BOY, email=payload.email,
                             password=payload.password, first_name=payload.first_name, last_name=payload.last_name)
    logger.info("admin.delivery_boy.created", extra={"delivery_boy_id": str(user.public_id)})
    return success_response(serialize_user(user), 201)


@admin_router.get("/delivery-boys", dependencies=[require_roles(UserRole.ADMIN)])
async def get_delivery_boys(session: AsyncSession = Depends(get_session)):
    users = await list_users(session, role=UserRole.DELIVERY_BOY.value)
    return success_response([serialize_user(u) for u in users])


@admin_router.get("/customers", dependencies=[require_roles(UserRole.ADMIN)])
async def get_customers(session: AsyncSession = Depends(get_session)):
    users = await list_users(session, role=UserRole.CUSTOMER.value)
    return success_response([serialize_user(u) for u in users])


@admin_router.get("/users", dependencies=[require_roles(UserRole.ADMIN)])
async def get_users(session: AsyncSession = Depends(get_session)):
    users = await list_users(session)
    return success_response([serialize_user(u) for u in users])
