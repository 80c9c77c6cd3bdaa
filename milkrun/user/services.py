from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from milkrun.auth.utils import hash_password
from milkrun.common.utils import now
from milkrun.schema.full_schema import Users, UserRole
from milkrun.user.repository import email_exists, phone_exists
from milkrun.user.constants import logger


async def create_user(session, phone: str, role: UserRole, email: Optional[str] = None,
                      password: Optional[str] = None, first_name: Optional[str] = None,
                      last_name: Optional[str] = None, is_phone_verified: bool = False) -> Users:
    """Insert a user. Duplicate phone or email is a 409, whether caught here or by the unique index."""
    phone = phone.strip()
    email = email.strip().lower() if email else None

    if await phone_exists(session, phone):
        logger.warning("user.create.duplicate", extra={"phone": phone, "field": "phone"})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this phone already exists")
    if email and await email_exists(session, email):
        logger.warning("user.create.duplicate", extra={"phone": phone, "field": "email"})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

    user = Users(
        phone=phone,
        email=email,
        password_hash=hash_password(password) if password else None,
        first_name=first_name,
        last_name=last_name,
        role=UserRole(role).value,
        is_phone_verified=is_phone_verified,
    )
    try:
        session.add(user)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("user.create.integrity_error", extra={"phone": phone})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with that phone or email already exists")

    await session.refresh(user)
    logger.info("user.created", extra={"user_public_id": str(user.public_id), "role": user.role})
    return user


async def update_profile(session, user: Users, changes: dict) -> Users:
    """Apply email/password/name changes. The role is not part of a profile."""
    if changes.get("email") is not None:
        email = changes["email"].strip().lower()
        if email != user.email and await email_exists(session, email, exclude_user_id=user.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
        user.email = email
    if changes.get("password"):
        user.password_hash = hash_password(changes["password"])
    for field in ("first_name", "last_name"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])

    user.updated_at = now()
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

    await session.refresh(user)
    logger.info("user.profile.updated", extra={"user_public_id": str(user.public_id), "fields": sorted(changes)})
    return user


def set_refresh_token(user: Users, refresh_hash: Optional[str]):
    user.refresh_token_hash = refresh_hash
    user.updated_at = now()

def mark_login(user: Users, phone_verified: bool = False):
    user.last_login_at = now()
    if phone_verified:
        user.is_phone_verified = True
    user.updated_at = now()
