from typing import List, Optional
from fastapi import HTTPException, status
from milkrun.orders.repository import get_order, list_orders
from milkrun.orders.services import apply_status
from milkrun.schema.full_schema import Orders, OrderStatus
from milkrun.delivery.constants import logger


async def my_deliveries(session, delivery_boy_id: int, order_status: Optional[str] = None) -> List[Orders]:
    return await list_orders(session, assigned_to=delivery_boy_id, status=order_status,
                             order_by=(Orders.delivery_date.asc(), Orders.id.asc()))


async def require_delivery(session, delivery_boy_id: int, order_id: int) -> Orders:
    order = await get_order(session, order_id, assigned_to=delivery_boy_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")
    return order


async def update_delivery_status(session, delivery_boy_id: int, order_id: int, new_status: OrderStatus) -> Orders:
    order = await require_delivery(session, delivery_boy_id, order_id)
    apply_status(order, new_status)
    await session.commit()
    await session.refresh(order)

    logger.info("delivery.status.updated", extra={"order_id": order_id, "to_status": order.status})
    return order


async def mark_delivered(session, delivery_boy_id: int, order_id: int) -> Orders:
    return await update_delivery_status(session, delivery_boy_id, order_id, OrderStatus.DELIVERED)


async def delivery_history(session, delivery_boy_id: int) -> List[Orders]:
    return await list_orders(session, assigned_to=delivery_boy_id, status=OrderStatus.DELIVERED.value,
                             order_by=(Orders.delivered_at.desc(), Orders.id.desc()))
