from typing import List, Optional
from sqlalchemy import select
from milkrun.schema.full_schema import Product


async def get_product(session, product_id: int) -> Optional[Product]:
    return await session.get(Product, product_id)

async def get_product_by_slug(session, slug: str) -> Optional[Product]:
    stmt = select(Product).where(Product.slug == slug)
    return (await session.execute(stmt)).scalar_one_or_none()


async def product_slug_taken(session, slug: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Product.id).where(Product.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    return (await session.execute(stmt.limit(1))).first() is not None


async def list_products(session, category_id: Optional[int] = None,
                        is_featured: Optional[bool] = None) -> List[Product]:
    stmt = select(Product).where(Product.is_active.is_(True))
    if category_id is not None:
        stmt = stmt.where(Product.category_id == category_id)
    if is_featured is not None:
        stmt = stmt.where(Product.is_featured.is_(is_featured))
    stmt = stmt.order_by(Product.sort_order.asc(), Product.created_at.desc(), Product.id.desc())
    return list((await session.execute(stmt)).scalars().all())
