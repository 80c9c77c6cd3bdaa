from datetime import datetime, timedelta
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from milkrun.addresses.services import require_user_address
from milkrun.common.utils import as_utc, now
from milkrun.products.services import require_product
from milkrun.schema.full_schema import SubscriptionPlan, SubscriptionStatus, UserSubscription
from milkrun.subscriptions.repository import get_plan, get_user_subscription
from milkrun.subscriptions.constants import logger


async def require_plan(session, plan_id: int) -> SubscriptionPlan:
    plan = await get_plan(session, plan_id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription plan not found")
    return plan


async def create_plan(session, data: dict) -> SubscriptionPlan:
    await require_product(session, data["product_id"])

    plan = SubscriptionPlan(**{**data, "type": data["type"].value})
    session.add(plan)
    await session.commit()
    await session.refresh(plan)

    logger.info("subscription.plan.created", extra={"plan_id": plan.id, "product_id": plan.product_id})
    return plan


async def update_plan(session, plan_id: int, changes: dict) -> SubscriptionPlan:
    plan = await require_plan(session, plan_id)
    for field, value in changes.items():
        if value is None:
            continue
        setattr(plan, field, getattr(value, "value", value))
    plan.updated_at = now()

    await session.commit()
    await session.refresh(plan)
    logger.info("subscription.plan.updated", extra={"plan_id": plan_id})
    return plan


async def delete_plan(session, plan_id: int):
    plan = await require_plan(session, plan_id)
    await session.delete(plan)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Plan has subscriptions")
    logger.info("subscription.plan.deleted", extra={"plan_id": plan_id})


async def subscribe(session, user_id: int, plan_id: int, delivery_address_id: int,
                    start_date: Optional[datetime] = None) -> UserSubscription:
    plan = await require_plan(session, plan_id)
    await require_user_address(session, user_id, delivery_address_id)

    start = as_utc(start_date) if start_date else now()
    subscription = UserSubscription(
        user_id=user_id,
        plan_id=plan.id,
        delivery_address_id=delivery_address_id,
        start_date=start,
        end_date=start + timedelta(days=plan.duration),
        status=SubscriptionStatus.ACTIVE.value,
        total_amount=plan.total_price,
    )
    session.add(subscription)
    await session.commit()
    await session.refresh(subscription)

    logger.info("subscription.create.success", extra={"subscription_id": subscription.id, "plan_id": plan.id})
    return subscription


async def require_subscription(session, user_id: int, subscription_id: int) -> UserSubscription:
    subscription = await get_user_subscription(session, user_id, subscription_id)
    if not subscription:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")
    return subscription


async def pause_subscription(session, user_id: int, subscription_id: int, paused_until: datetime) -> UserSubscription:
    subscription = await require_subscription(session, user_id, subscription_id)
    if subscription.status != SubscriptionStatus.ACTIVE.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Can only pause active subscriptions")

    subscription.status = SubscriptionStatus.PAUSED.value
    subscription.paused_from = now()
    subscription.paused_until = as_utc(paused_until)
    subscription.updated_at = now()
    await session.commit()
    await session.refresh(subscription)

    logger.info("subscription.pause.success", extra={"subscription_id": subscription_id})
    return subscription


async def resume_subscription(session, user_id: int, subscription_id: int) -> UserSubscription:
    subscription = await require_subscription(session, user_id, subscription_id)
    if subscription.status != SubscriptionStatus.PAUSED.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Can only resume paused subscriptions")

    subscription.status = SubscriptionStatus.ACTIVE.value
    subscription.paused_from = None
    subscription.paused_until = None
    subscription.updated_at = now()
    await session.commit()
    await session.refresh(subscription)

    logger.info("subscription.resume.success", extra={"subscription_id": subscription_id})
    return subscription


async def cancel_subscription(session, user_id: int, subscription_id: int,
                              reason: Optional[str] = None) -> UserSubscription:
    # allowed from every state
    subscription = await require_subscription(session, user_id, subscription_id)

    subscription.status = SubscriptionStatus.CANCELLED.value
    subscription.cancelled_at = now()
    subscription.cancellation_reason = reason
    subscription.updated_at = now()
    await session.commit()
    await session.refresh(subscription)

    logger.info("subscription.cancel.success", extra={"subscription_id": subscription_id})
    return subscription
