from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id, require_roles
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.delivery.models import DeliveryStatusIn
from milkrun.delivery.services import (delivery_history, mark_delivered, my_deliveries, require_delivery,
                                       update_delivery_status)
from milkrun.schema.full_schema import OrderStatus, UserRole

# every route here is for delivery boys only
delivery_router = APIRouter(dependencies=[require_roles(UserRole.DELIVERY_BOY)])


@delivery_router.get("/my-deliveries")
async def get_my_deliveries(order_status: Optional[OrderStatus] = Query(None, alias="status"),
                            user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    orders = await my_deliveries(session, user_id, order_status.value if order_status else None)
    return success_response(orders)


@delivery_router.get("/my-deliveries/{order_id}")
async def get_my_delivery(order_id: int, user_id: int = Depends(current_user_id),
                          session: AsyncSession = Depends(get_session)):
    return success_response(await require_delivery(session, user_id, order_id))


@delivery_router.patch("/{order_id}/status")
async def set_delivery_status(order_id: int, payload: DeliveryStatusIn, user_id: int = Depends(current_user_id),
                              session: AsyncSession = Depends(get_session)):
    return success_response(await update_delivery_status(session, user_id, order_id, payload.status))


@delivery_router.patch("/{order_id}/deliver")
async def deliver(order_id: int, user_id: int = Depends(current_user_id),
                  session: AsyncSession = Depends(get_session)):
    return success_response(await mark_delivered(session, user_id, order_id))


@delivery_router.get("/history")
async def get_history(user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    return success_response(await delivery_history(session, user_id))
