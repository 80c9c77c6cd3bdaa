from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id
from milkrun.auth.models import LoginIn, OTPRequestIn, OTPVerifyIn, RefreshIn
from milkrun.auth.services import (auth_payload, authenticate_password, issue_auth_tokens, logout_user,
                                   require_active_delivery_boy, rotate_refresh_token, verify_customer_otp,
                                   verify_delivery_boy_otp)
from milkrun.common.utils import success_response
from milkrun.config.admin_config import admin_config
from milkrun.db.dependencies import get_session
from milkrun.otp.services import issue_otp
from milkrun.user.repository import get_user_by_id
from milkrun.auth.constants import logger

current_env = admin_config.ENV

auth_router = APIRouter()


def _otp_sent_response(phone: str, code: str):
    resp = {"message": "OTP sent successfully", "phone": phone}
    if current_env == "dev":
        resp["otp"] = code
    return success_response(resp, 200)


@auth_router.post("/request-otp")
async def request_otp(payload: OTPRequestIn, session: AsyncSession = Depends(get_session)):
    logger.info("otp.request.attempt", extra={"phone": payload.phone})
    code = await issue_otp(session, payload.phone)
    return _otp_sent_response(payload.phone, code)


@auth_router.post("/verify-otp")
async def verify_otp_login(payload: OTPVerifyIn, session: AsyncSession = Depends(get_session)):
    user, access, refresh = await verify_customer_otp(session, payload.phone, payload.otp,
                                                      payload.first_name, payload.last_name)
    logger.info("auth.otp_login.success", extra={"user_public_id": str(user.public_id)})
    return success_response(auth_payload(user, access, refresh), 200)


@auth_router.post("/login")
async def login_user(payload: LoginIn, session: AsyncSession = Depends(get_session)):
    logger.info("login.attempt", extra={"by": "phone" if payload.phone else "email"})

    user = await authenticate_password(session, payload.password, phone=payload.phone, email=payload.email)
    access, refresh = await issue_auth_tokens(session, user)

    logger.info("login.success", extra={"user_public_id": str(user.public_id)})
    return success_response(auth_payload(user, access, refresh), 200)


@auth_router.post("/refresh")
async def refresh_auth(payload: RefreshIn, session: AsyncSession = Depends(get_session)):
    user, access, refresh = await rotate_refresh_token(session, payload.refresh_token)
    return success_response(auth_payload(user, access, refresh), 200)


@auth_router.post("/delivery-boy/request-otp")
async def delivery_boy_request_otp(payload: OTPRequestIn, session: AsyncSession = Depends(get_session)):
    await require_active_delivery_boy(session, payload.phone)
    code = await issue_otp(session, payload.phone)
    return _otp_sent_response(payload.phone, code)


@auth_router.post("/delivery-boy/verify-otp")
async def delivery_boy_verify_otp(payload: OTPVerifyIn, session: AsyncSession = Depends(get_session)):
    user, access, refresh = await verify_delivery_boy_otp(session, payload.phone, payload.otp)
    logger.info("auth.delivery_boy.login.success", extra={"user_public_id": str(user.public_id)})
    return success_response(auth_payload(user, access, refresh), 200)


@auth_router.post("/logout")
async def logout(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    user = await get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    await logout_user(session, user)
    return success_response({"message": "Logged out successfully."}, 200)
