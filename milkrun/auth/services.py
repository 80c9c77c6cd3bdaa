from typing import Optional, Tuple
from fastapi import HTTPException, status
from milkrun.auth.utils import create_access_token, create_refresh_token, decode_refresh_token, hash_password, verify_password
from milkrun.otp.services import cleanup_otp, verify_otp
from milkrun.schema.full_schema import Users, UserRole
from milkrun.user.repository import get_user_by_email, get_user_by_phone, get_user_by_public_id
from milkrun.user.services import create_user, mark_login, set_refresh_token
from milkrun.user.utils import serialize_user
from milkrun.auth.constants import logger


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def issue_auth_tokens(session, user: Users, phone_verified: bool = False) -> Tuple[str, str]:
    """Mint an access/refresh pair and persist only the refresh hash."""
    access = create_access_token(user)
    refresh = create_refresh_token(user)

    set_refresh_token(user, hash_password(refresh))
    mark_login(user, phone_verified=phone_verified)
    await session.commit()
    await session.refresh(user)

    logger.info("auth.tokens.issued", extra={"user_public_id": str(user.public_id), "role": user.role})
    return access, refresh


def auth_payload(user: Users, access: str, refresh: str) -> dict:
    return {
        "access_token": access,
        "refresh_token": refresh,
        "token_type": "bearer",
        "user": serialize_user(user),
    }


async def verify_customer_otp(session, phone: str, code: str,
                              first_name: Optional[str] = None, last_name: Optional[str] = None):
    await verify_otp(session, phone, code)

    user = await get_user_by_phone(session, phone)
    if user is None:
        user = await create_user(session, phone=phone, role=UserRole.CUSTOMER,
                                 first_name=first_name, last_name=last_name, is_phone_verified=True)
        logger.info("auth.signup.success", extra={"user_public_id": str(user.public_id)})
    elif not user.is_active:
        logger.warning("auth.otp_login.failed", extra={"reason": "inactive", "user_public_id": str(user.public_id)})
        raise _unauthorized("Account is deactivated")

    access, refresh = await issue_auth_tokens(session, user, phone_verified=True)
    await cleanup_otp(session, phone)
    return user, access, refresh


async def require_active_delivery_boy(session, phone: str) -> Users:
    user = await get_user_by_phone(session, phone)
    if user is None or user.role != UserRole.DELIVERY_BOY.value or not user.is_active:
        logger.warning("auth.delivery_boy.rejected", extra={"phone": phone})
        raise _unauthorized("No active delivery account for this phone")
    return user


async def verify_delivery_boy_otp(session, phone: str, code: str):
    await verify_otp(session, phone, code)
    user = await require_active_delivery_boy(session, phone)

    access, refresh = await issue_auth_tokens(session, user, phone_verified=True)
    await cleanup_otp(session, phone)
    return user, access, refresh


async def authenticate_password(session, password: str, phone: Optional[str] = None,
                                email: Optional[str] = None) -> Users:
    if not phone and not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone or email is required")

    user = await get_user_by_phone(session, phone) if phone else await get_user_by_email(session, email)

    if user is None or not verify_password(password, user.password_hash):
        logger.warning("auth.login.failed", extra={"reason": "invalid_credentials"})
        raise _unauthorized("Invalid credentials")
    if not user.is_active:
        logger.warning("auth.login.failed", extra={"reason": "inactive", "user_public_id": str(user.public_id)})
        raise _unauthorized("Account is deactivated")
    return user


async def rotate_refresh_token(session, refresh_token: str):
    """Exchange a refresh token for a new pair. The presented token stops working."""
    claims = decode_refresh_token(refresh_token)
    if not claims:
        logger.warning("auth.refresh.failed", extra={"reason": "invalid_token"})
        raise _unauthorized("Invalid or expired refresh token")

    user = await get_user_by_public_id(session, claims.get("sub"))
    if user is None or not user.is_active:
        logger.warning("auth.refresh.failed", extra={"reason": "user_unavailable", "user_public_id": claims.get("sub")})
        raise _unauthorized("Invalid refresh token")

    if not verify_password(refresh_token, user.refresh_token_hash):
        logger.warning("auth.refresh.failed", extra={"reason": "hash_mismatch", "user_public_id": str(user.public_id)})
        raise _unauthorized("Invalid refresh token")

    access, refresh = await issue_auth_tokens(session, user)
    logger.info("auth.refresh.success", extra={"user_public_id": str(user.public_id)})
    return user, access, refresh


async def logout_user(session, user: Users):
    set_refresh_token(user, None)
    await session.commit()
    logger.info("auth.logout.success", extra={"user_public_id": str(user.public_id)})
