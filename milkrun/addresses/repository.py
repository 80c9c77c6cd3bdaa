from typing import List, Optional
from sqlalchemy import select, update
from milkrun.common.utils import now
from milkrun.schema.full_schema import Address


async def get_user_address(session, user_id: int, address_id: int) -> Optional[Address]:
    stmt = select(Address).where(Address.id == address_id, Address.user_id == user_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def list_user_addresses(session, user_id: int) -> List[Address]:
    stmt = (
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.created_at.desc(), Address.id.desc())
    )
    return list((await session.execute(stmt)).scalars().all())


async def clear_default_addresses(session, user_id: int, keep_id: Optional[int] = None):
    stmt = (
        update(Address)
        .where(Address.user_id == user_id, Address.is_default.is_(True))
        .values(is_default=False, updated_at=now())
    )
    if keep_id is not None:
        stmt = stmt.where(Address.id != keep_id)
    await session.execute(stmt)
