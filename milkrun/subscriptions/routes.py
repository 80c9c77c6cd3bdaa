from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import current_user_id, require_roles
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.schema.full_schema import SubscriptionStatus, UserRole
from milkrun.subscriptions.models import CancelSubscriptionIn, PauseIn, PlanCreateIn, PlanUpdateIn, SubscribeIn
from milkrun.subscriptions.repository import list_active_plans, list_user_subscriptions
from milkrun.subscriptions.services import (cancel_subscription, create_plan, delete_plan, pause_subscription,
                                            require_plan, resume_subscription, subscribe, update_plan)

subscriptions_router = APIRouter()


#* plans ----------------------------------------------------------------------------------------------------

@subscriptions_router.post("/plans", status_code=status.HTTP_201_CREATED, dependencies=[require_roles(UserRole.ADMIN)])
async def add_plan(payload: PlanCreateIn, session: AsyncSession = Depends(get_session)):
    return success_response(await create_plan(session, payload.model_dump()), 201)


@subscriptions_router.get("/plans")
async def get_plans(product_id: Optional[int] = Query(None), session: AsyncSession = Depends(get_session)):
    return success_response(await list_active_plans(session, product_id=product_id))


@subscriptions_router.get("/plans/{plan_id}")
async def get_plan(plan_id: int, session: AsyncSession = Depends(get_session)):
    return success_response(await require_plan(session, plan_id))


@subscriptions_router.patch("/plans/{plan_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def patch_plan(plan_id: int, payload: PlanUpdateIn, session: AsyncSession = Depends(get_session)):
    return success_response(await update_plan(session, plan_id, payload.model_dump(exclude_unset=True)))


@subscriptions_router.delete("/plans/{plan_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def remove_plan(plan_id: int, session: AsyncSession = Depends(get_session)):
    await delete_plan(session, plan_id)
    return success_response({"message": "Subscription plan deleted"})


#* user subscriptions ---------------------------------------------------------------------------------------

@subscriptions_router.post("", status_code=status.HTTP_201_CREATED)
async def create_subscription(payload: SubscribeIn, user_id: int = Depends(current_user_id),
                              session: AsyncSession = Depends(get_session)):
    subscription = await subscribe(session, user_id, payload.plan_id, payload.delivery_address_id,
                                   start_date=payload.start_date)
    return success_response(subscription, 201)


@subscriptions_router.get("/my-subscriptions")
async def my_subscriptions(sub_status: Optional[SubscriptionStatus] = Query(None, alias="status"),
                           user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    subscriptions = await list_user_subscriptions(session, user_id,
                                                  status=sub_status.value if sub_status else None)
    return success_response(subscriptions)


@subscriptions_router.patch("/{subscription_id}/pause")
async def pause(subscription_id: int, payload: PauseIn, user_id: int = Depends(current_user_id),
                session: AsyncSession = Depends(get_session)):
    return success_response(await pause_subscription(session, user_id, subscription_id, payload.paused_until))


@subscriptions_router.patch("/{subscription_id}/resume")
async def resume(subscription_id: int, user_id: int = Depends(current_user_id),
                 session: AsyncSession = Depends(get_session)):
    return success_response(await resume_subscription(session, user_id, subscription_id))


@subscriptions_router.patch("/{subscription_id}/cancel")
async def cancel(subscription_id: int, payload: Optional[CancelSubscriptionIn] = None,
                 user_id: int = Depends(current_user_id), session: AsyncSession = Depends(get_session)):
    reason = payload.reason if payload else None
    return success_response(await cancel_subscription(session, user_id, subscription_id, reason))
