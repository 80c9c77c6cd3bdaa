from typing import Optional
from fastapi import HTTPException, status
from milkrun.addresses.services import require_user_address
from milkrun.cart.repository import get_cart
from milkrun.cart.services import empty_cart
from milkrun.common.utils import now
from milkrun.orders.repository import get_order
from milkrun.orders.utils import generate_order_number, snapshot_items
from milkrun.schema.full_schema import Orders, OrderStatus, TERMINAL_ORDER_STATUSES, UserRole
from milkrun.user.repository import get_user_by_public_id
from milkrun.orders.constants import logger


async def create_order(session, user_id: int, delivery_address_id: int, delivery_date=None,
                       notes: Optional[str] = None) -> Orders:
    """Turn the caller's cart into a pending order and empty the cart.

    The order insert and the cart clear share one commit, so either both land or neither does.
    """
    await require_user_address(session, user_id, delivery_address_id)

    cart = await get_cart(session, user_id, for_update=True)
    if not cart or not cart.items:
        logger.warning("order.create.failed", extra={"reason": "empty_cart"})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")

    order = Orders(
        order_number=generate_order_number(),
        customer_id=user_id,
        items=snapshot_items(cart.items),
        total_amount=cart.total_amount,
        status=OrderStatus.PENDING.value,
        delivery_address_id=delivery_address_id,
        delivery_date=delivery_date,
        notes=notes,
    )
    session.add(order)
    empty_cart(cart)

    await session.commit()
    await session.refresh(order)

    logger.info("order.create.success", extra={"order_id": order.id, "order_number": order.order_number,
                                               "total_amount": order.total_amount})
    return order


async def require_order(session, order_id: int, customer_id: Optional[int] = None) -> Orders:
    order = await get_order(session, order_id, customer_id=customer_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


async def cancel_order(session, user_id: int, order_id: int, reason: Optional[str] = None) -> Orders:
    order = await require_order(session, order_id, customer_id=user_id)

    if order.status in TERMINAL_ORDER_STATUSES:
        logger.warning("order.cancel.rejected", extra={"order_id": order_id, "status": order.status})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot cancel this order")

    order.status = OrderStatus.CANCELLED.value
    order.cancelled_at = now()
    order.cancellation_reason = reason
    order.updated_at = now()
    await session.commit()
    await session.refresh(order)

    logger.info("order.cancel.success", extra={"order_id": order_id})
    return order


def apply_status(order: Orders, new_status: OrderStatus):
    # any status may follow any other; only delivery is stamped
    order.status = OrderStatus(new_status).value
    if order.status == OrderStatus.DELIVERED.value:
        order.delivered_at = now()
    order.updated_at = now()


async def update_order_status(session, order_id: int, new_status: OrderStatus) -> Orders:
    order = await require_order(session, order_id)
    previous = order.status

    apply_status(order, new_status)
    await session.commit()
    await session.refresh(order)

    logger.info("order.status.updated", extra={"order_id": order_id, "from_status": previous, "to_status": order.status})
    return order


async def assign_delivery_boy(session, order_id: int, delivery_boy_public_id) -> Orders:
    order = await require_order(session, order_id)

    delivery_boy = await get_user_by_public_id(session, delivery_boy_public_id)
    if not delivery_boy or delivery_boy.role != UserRole.DELIVERY_BOY.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery boy not found")

    order.assigned_delivery_boy_id = delivery_boy.id
    order.status = OrderStatus.PROCESSING.value
    order.updated_at = now()
    await session.commit()
    await session.refresh(order)

    logger.info("order.assign.success", extra={"order_id": order_id, "delivery_boy_id": str(delivery_boy.public_id)})
    return order
