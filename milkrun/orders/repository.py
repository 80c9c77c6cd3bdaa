from typing import List, Optional
from sqlalchemy import select
from milkrun.schema.full_schema import Orders


async def get_order(session, order_id: int, customer_id: Optional[int] = None,
                    assigned_to: Optional[int] = None) -> Optional[Orders]:
    stmt = select(Orders).where(Orders.id == order_id)
    if customer_id is not None:
        stmt = stmt.where(Orders.customer_id == customer_id)
    if assigned_to is not None:
        stmt = stmt.where(Orders.assigned_delivery_boy_id == assigned_to)
    return (await session.execute(stmt)).scalar_one_or_none()


async def list_orders(session, customer_id: Optional[int] = None, assigned_to: Optional[int] = None,
                      status: Optional[str] = None, order_by=None) -> List[Orders]:
    stmt = select(Orders)
    if customer_id is not None:
        stmt = stmt.where(Orders.customer_id == customer_id)
    if assigned_to is not None:
        stmt = stmt.where(Orders.assigned_delivery_boy_id == assigned_to)
    if status is not None:
        stmt = stmt.where(Orders.status == status)

    if order_by is None:
        order_by = (Orders.created_at.desc(), Orders.id.desc())
    stmt = stmt.order_by(*order_by)
    return list((await session.execute(stmt)).scalars().all())
