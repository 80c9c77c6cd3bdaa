from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.addresses.models import AddressIn, AddressUpdateIn
from milkrun.addresses.repository import list_user_addresses
from milkrun.addresses.services import create_address, delete_address, require_user_address, update_address
from milkrun.auth.dependencies import current_user_id
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session

addresses_router = APIRouter()


@addresses_router.post("", status_code=status.HTTP_201_CREATED)
async def add_address(payload: AddressIn, user_id: int = Depends(current_user_id),
                      session: AsyncSession = Depends(get_session)):
    address = await create_address(session, user_id, payload.model_dump())
    return success_response(address, 201)


@addresses_router.get("")
async def get_addresses(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    return success_response(await list_user_addresses(session, user_id))


@addresses_router.get("/{address_id}")
async def get_address(address_id: int, user_id: int = Depends(current_user_id),
                      session: AsyncSession = Depends(get_session)):
    return success_response(await require_user_address(session, user_id, address_id))


@addresses_router.patch("/{address_id}")
async def patch_address(address_id: int, payload: AddressUpdateIn, user_id: int = Depends(current_user_id),
                        session: AsyncSession = Depends(get_session)):
    address = await update_address(session, user_id, address_id, payload.model_dump(exclude_unset=True))
    return success_response(address)


@addresses_router.delete("/{address_id}")
async def remove_address(address_id: int, user_id: int = Depends(current_user_id),
                         session: AsyncSession = Depends(get_session)):
    await delete_address(session, user_id, address_id)
    return success_response({"message": "Address deleted"})
