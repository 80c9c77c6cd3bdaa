from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id, require_roles
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.orders.models import AssignDeliveryIn, CancelOrderIn, OrderCreateIn, OrderStatusIn
from milkrun.orders.repository import list_orders
from milkrun.orders.services import assign_delivery_boy, cancel_order, create_order, require_order, update_order_status
from milkrun.schema.full_schema import OrderStatus, UserRole

orders_router = APIRouter()


@orders_router.post("", status_code=status.HTTP_201_CREATED)
async def place_order(payload: OrderCreateIn, user_id: int = Depends(current_user_id),
                      session: AsyncSession = Depends(get_session)):
    order = await create_order(session, user_id, payload.delivery_address_id,
                               delivery_date=payload.delivery_date, notes=payload.notes)
    return success_response(order, 201)


@orders_router.get("/my-orders")
async def my_orders(order_status: Optional[OrderStatus] = Query(None, alias="status"),
                    user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    orders = await list_orders(session, customer_id=user_id,
                               status=order_status.value if order_status else None)
    return success_response(orders)


@orders_router.get("", dependencies=[require_roles(UserRole.ADMIN)])
async def all_orders(order_status: Optional[OrderStatus] = Query(None, alias="status"),
                     session: AsyncSession = Depends(get_session)):
    orders = await list_orders(session, status=order_status.value if order_status else None)
    return success_response(orders)


@orders_router.get("/{order_id}")
async def get_order(order_id: int, user_id: int = Depends(current_user_id),
                    session: AsyncSession = Depends(get_session)):
    return success_response(await require_order(session, order_id, customer_id=user_id))


@orders_router.patch("/{order_id}/cancel")
async def cancel(order_id: int, payload: Optional[CancelOrderIn] = None, user_id: int = Depends(current_user_id),
                 session: AsyncSession = Depends(get_session)):
    reason = payload.reason if payload else None
    return success_response(await cancel_order(session, user_id, order_id, reason))


@orders_router.patch("/{order_id}/status", dependencies=[require_roles(UserRole.ADMIN)])
async def set_status(order_id: int, payload: OrderStatusIn, session: AsyncSession = Depends(get_session)):
    return success_response(await update_order_status(session, order_id, payload.status))


@orders_router.patch("/{order_id}/assign", dependencies=[require_roles(UserRole.ADMIN)])
async def assign(order_id: int, payload: AssignDeliveryIn, session: AsyncSession = Depends(get_session)):
    return success_response(await assign_delivery_boy(session, order_id, payload.delivery_boy_id))
