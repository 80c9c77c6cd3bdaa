from typing import List, Optional
from sqlalchemy import or_, select
from milkrun.schema.full_schema import Category


async def get_category(session, category_id: int) -> Optional[Category]:
    return await session.get(Category, category_id)

async def get_category_by_slug(session, slug: str) -> Optional[Category]:
    stmt = select(Category).where(Category.slug == slug)
    return (await session.execute(stmt)).scalar_one_or_none()


async def category_name_or_slug_taken(session, name: str, slug: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Category.id).where(or_(Category.name == name, Category.slug == slug))
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    return (await session.execute(stmt.limit(1))).first() is not None


async def list_categories(session, is_active: Optional[bool] = None) -> List[Category]:
    stmt = select(Category)
    if is_active is not None:
        stmt = stmt.where(Category.is_active.is_(is_active))
    stmt = stmt.order_by(Category.sort_order.asc(), Category.name.asc())
    return list((await session.execute(stmt)).scalars().all())
