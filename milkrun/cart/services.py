from fastapi import HTTPException, status
from milkrun.cart.repository import get_cart, get_or_create_cart
from milkrun.cart.utils import add_line, cart_total, find_line, set_line_quantity
from milkrun.common.utils import now
from milkrun.products.services import require_product, unit_price
from milkrun.schema.full_schema import Cart
from milkrun.cart.constants import logger


def _apply_items(cart: Cart, items):
    # reassign so the JSON column is flagged dirty
    cart.items = items
    cart.total_amount = cart_total(items)
    cart.updated_at = now()


async def add_to_cart(session, user_id: int, product_id: int, quantity: int) -> Cart:
    product = await require_product(session, product_id)
    cart = await get_or_create_cart(session, user_id)

    _apply_items(cart, add_line(cart.items, product.id, product.name, unit_price(product), quantity))
    await session.commit()
    await session.refresh(cart)

    logger.info("cart.add.success", extra={"cart_id": cart.id, "product_id": product_id, "quantity": quantity})
    return cart


async def update_quantity(session, user_id: int, product_id: int, quantity: int) -> Cart:
    cart = await get_cart(session, user_id, for_update=True)
    if not cart:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart not found")

    idx = find_line(cart.items, product_id)
    if idx == -1:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not in cart")

    _apply_items(cart, set_line_quantity(cart.items, idx, quantity))
    await session.commit()
    await session.refresh(cart)

    logger.info("cart.update.success", extra={"cart_id": cart.id, "product_id": product_id, "quantity": quantity})
    return cart


async def remove_from_cart(session, user_id: int, product_id: int) -> Cart:
    return await update_quantity(session, user_id, product_id, 0)


def empty_cart(cart: Cart):
    """Empty in place without committing, so callers can fold it into a larger transaction."""
    _apply_items(cart, [])


async def clear_cart(session, user_id: int) -> Cart:
    cart = await get_cart(session, user_id, for_update=True)
    if not cart:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart not found")

    empty_cart(cart)
    await session.commit()
    await session.refresh(cart)
    logger.info("cart.clear.success", extra={"cart_id": cart.id})
    return cart
