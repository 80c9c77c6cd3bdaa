from typing import List, Optional, Union
from uuid import UUID
from sqlalchemy import select
from milkrun.schema.full_schema import Users


def _parse_public_id(public_id: Union[str, UUID, None]) -> Optional[UUID]:
    if public_id is None or isinstance(public_id, UUID):
        return public_id
    try:
        return UUID(str(public_id))
    except ValueError:
        return None


async def get_user_by_id(session, user_id: int) -> Optional[Users]:
    stmt = select(Users).where(Users.id == user_id, Users.deleted_at.is_(None))
    return (await session.execute(stmt)).scalar_one_or_none()

async def get_user_by_public_id(session, public_id) -> Optional[Users]:
    pid = _parse_public_id(public_id)
    if pid is None:
        return None
    stmt = select(Users).where(Users.public_id == pid, Users.deleted_at.is_(None))
    return (await session.execute(stmt)).scalar_one_or_none()

async def get_active_user_by_public_id(session, public_id) -> Optional[Users]:
    user = await get_user_by_public_id(session, public_id)
    if user is None or not user.is_active:
        return None
    return user

async def get_user_by_phone(session, phone: str) -> Optional[Users]:
    stmt = select(Users).where(Users.phone == phone.strip(), Users.deleted_at.is_(None))
    return (await session.execute(stmt)).scalar_one_or_none()

async def get_user_by_email(session, email: str) -> Optional[Users]:
    stmt = select(Users).where(Users.email == email.strip().lower(), Users.deleted_at.is_(None))
    return (await session.execute(stmt)).scalar_one_or_none()


async def phone_exists(session, phone: str) -> bool:
    stmt = select(Users.id).where(Users.phone == phone.strip()).limit(1)
    return (await session.execute(stmt)).first() is not None

async def email_exists(session, email: str, exclude_user_id: Optional[int] = None) -> bool:
    stmt = select(Users.id).where(Users.email == email.strip().lower())
    if exclude_user_id is not None:
        stmt = stmt.where(Users.id != exclude_user_id)
    return (await session.execute(stmt.limit(1))).first() is not None


async def list_users(session, role: Optional[str] = None) -> List[Users]:
    stmt = select(Users).where(Users.deleted_at.is_(None))
    if role is not None:
        stmt = stmt.where(Users.role == role)
    stmt = stmt.order_by(Users.created_at.desc(), Users.id.desc())
    return list((await session.execute(stmt)).scalars().all())
