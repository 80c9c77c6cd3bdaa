from typing import List, Optional
from sqlalchemy import select
from milkrun.schema.full_schema import SubscriptionPlan, UserSubscription


async def get_plan(session, plan_id: int) -> Optional[SubscriptionPlan]:
    return await session.get(SubscriptionPlan, plan_id)


async def list_active_plans(session, product_id: Optional[int] = None) -> List[SubscriptionPlan]:
    stmt = select(SubscriptionPlan).where(SubscriptionPlan.is_active.is_(True))
    if product_id is not None:
        stmt = stmt.where(SubscriptionPlan.product_id == product_id)
    stmt = stmt.order_by(SubscriptionPlan.id.asc())
    return list((await session.execute(stmt)).scalars().all())


async def get_user_subscription(session, user_id: int, subscription_id: int) -> Optional[UserSubscription]:
    stmt = select(UserSubscription).where(UserSubscription.id == subscription_id,
                                          UserSubscription.user_id == user_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def list_user_subscriptions(session, user_id: int, status: Optional[str] = None) -> List[UserSubscription]:
    stmt = select(UserSubscription).where(UserSubscription.user_id == user_id)
    if status is not None:
        stmt = stmt.where(UserSubscription.status == status)
    stmt = stmt.order_by(UserSubscription.created_at.desc(), UserSubscription.id.desc())
    return list((await session.execute(stmt)).scalars().all())
