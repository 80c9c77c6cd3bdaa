from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from milkrun.addresses.repository import clear_default_addresses, get_user_address
from milkrun.common.utils import now
from milkrun.schema.full_schema import Address
from milkrun.addresses.constants import logger


async def require_user_address(session, user_id: int, address_id: int) -> Address:
    address = await get_user_address(session, user_id, address_id)
    if not address:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")
    return address


async def create_address(session, user_id: int, data: dict) -> Address:
    # at most one default per user: demote the others in the same transaction
    if data.get("is_default"):
        await clear_default_addresses(session, user_id)

    address = Address(user_id=user_id, **data)
    session.add(address)
    await session.commit()
    await session.refresh(address)

    logger.info("address.created", extra={"address_id": address.id, "is_default": address.is_default})
    return address


async def update_address(session, user_id: int, address_id: int, changes: dict) -> Address:
    address = await require_user_address(session, user_id, address_id)

    if changes.get("is_default"):
        await clear_default_addresses(session, user_id, keep_id=address.id)

    for field, value in changes.items():
        if value is not None:
            setattr(address, field, value)
    address.updated_at = now()

    await session.commit()
    await session.refresh(address)
    logger.info("address.updated", extra={"address_id": address.id})
    return address


async def delete_address(session, user_id: int, address_id: int):
    address = await require_user_address(session, user_id, address_id)
    await session.delete(address)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Address is used by an order or subscription")
    logger.info("address.deleted", extra={"address_id": address_id})
