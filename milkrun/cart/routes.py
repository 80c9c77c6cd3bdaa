from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id
from milkrun.cart.models import AddToCartIn, UpdateQuantityIn
from milkrun.cart.repository import get_cart
from milkrun.cart.services import add_to_cart, clear_cart, remove_from_cart, update_quantity
from milkrun.cart.utils import serialize_cart
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session

carts_router = APIRouter()


@carts_router.post("")
async def add_item(payload: AddToCartIn, user_id: int = Depends(current_user_id),
                   session: AsyncSession = Depends(get_session)):
    cart = await add_to_cart(session, user_id, payload.product_id, payload.quantity)
    return success_response(serialize_cart(cart))


@carts_router.get("")
async def view_cart(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    # no row yet means an empty cart, not a 404
    return success_response(serialize_cart(await get_cart(session, user_id)))


@carts_router.patch("/{product_id}")
async def change_quantity(product_id: int, payload: UpdateQuantityIn, user_id: int = Depends(current_user_id),
                          session: AsyncSession = Depends(get_session)):
    cart = await update_quantity(session, user_id, product_id, payload.quantity)
    return success_response(serialize_cart(cart))


@carts_router.delete("/{product_id}")
async def remove_item(product_id: int, user_id: int = Depends(current_user_id),
                      session: AsyncSession = Depends(get_session)):
    return success_response(serialize_cart(await remove_from_cart(session, user_id, product_id)))


@carts_router.delete("")
async def empty(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    return success_response(serialize_cart(await clear_cart(session, user_id)))
