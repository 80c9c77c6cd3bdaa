from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from milkrun.categories.services import require_category
from milkrun.common.utils import now
from milkrun.products.repository import get_product, product_slug_taken
from milkrun.products.utils import slugify
from milkrun.schema.full_schema import Product
from milkrun.products.constants import logger


def unit_price(product: Product) -> float:
    """Price a cart line is charged at: the discounted price when one is set."""
    return product.discounted_price or product.price


async def require_product(session, product_id: int) -> Product:
    product = await get_product(session, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


async def _commit_unique(session, slug: str):
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("product.integrity_error", extra={"slug": slug})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product with this name already exists")


async def create_product(session, data: dict) -> Product:
    await require_category(session, data["category_id"])

    slug = slugify(data["name"])
    if await product_slug_taken(session, slug):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product with this name already exists")

    product = Product(slug=slug, **data)
    session.add(product)
    await _commit_unique(session, slug)
    await session.refresh(product)

    logger.info("product.create.success", extra={"product_id": product.id, "slug": slug})
    return product


async def update_product(session, product_id: int, changes: dict) -> Product:
    product = await require_product(session, product_id)

    if changes.get("category_id") is not None:
        await require_category(session, changes["category_id"])

    name = changes.get("name")
    if name and name != product.name:
        slug = slugify(name)
        if await product_slug_taken(session, slug, exclude_id=product.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product with this name already exists")
        product.slug = slug

    for field, value in changes.items():
        if value is not None:
            setattr(product, field, value)
    product.updated_at = now()

    await _commit_unique(session, product.slug)
    await session.refresh(product)
    logger.info("product.update.success", extra={"product_id": product.id})
    return product


async def delete_product(session, product_id: int):
    product = await require_product(session, product_id)
    await session.delete(product)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product has subscriptions")
    logger.info("product.delete.success", extra={"product_id": product_id})
