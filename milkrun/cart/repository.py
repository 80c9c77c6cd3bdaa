from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from milkrun.schema.full_schema import Cart


async def get_cart(session, user_id: int, for_update: bool = False) -> Optional[Cart]:
    stmt = select(Cart).where(Cart.user_id == user_id)
    if for_update:
        # row lock held until the caller commits; serialises read-modify-write on the items
        stmt = stmt.with_for_update()
    return (await session.execute(stmt)).scalar_one_or_none()


async def get_or_create_cart(session, user_id: int) -> Cart:
    cart = await get_cart(session, user_id, for_update=True)
    if cart:
        return cart

    cart = Cart(user_id=user_id, items=[], total_amount=0)
    try:
        # only the insert is undone on a collision
        async with session.begin_nested():
            session.add(cart)
        return cart
    except IntegrityError:
        # another request created it first
        return await get_cart(session, user_id, for_update=True)
