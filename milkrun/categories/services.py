from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from milkrun.categories.repository import category_name_or_slug_taken, get_category
from milkrun.common.utils import now
from milkrun.products.utils import slugify
from milkrun.schema.full_schema import Category
from milkrun.categories.constants import logger


async def require_category(session, category_id: int) -> Category:
    category = await get_category(session, category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


async def _commit_unique(session, what: str):
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("category.integrity_error", extra={"category_name": what})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists")


async def create_category(session, data: dict) -> Category:
    slug = slugify(data["name"])
    if await category_name_or_slug_taken(session, data["name"], slug):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists")

    category = Category(slug=slug, **data)
    session.add(category)
    await _commit_unique(session, data["name"])
    await session.refresh(category)

    logger.info("category.created", extra={"category_id": category.id, "slug": slug})
    return category


async def update_category(session, category_id: int, changes: dict) -> Category:
    category = await require_category(session, category_id)

    name = changes.get("name")
    if name and name != category.name:
        slug = slugify(name)
        if await category_name_or_slug_taken(session, name, slug, exclude_id=category.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists")
        category.slug = slug

    for field, value in changes.items():
        if value is not None:
            setattr(category, field, value)
    category.updated_at = now()

    await _commit_unique(session, category.name)
    await session.refresh(category)
    logger.info("category.updated", extra={"category_id": category.id})
    return category


async def delete_category(session, category_id: int):
    category = await require_category(session, category_id)
    await session.delete(category)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category still has products")
    logger.info("category.deleted", extra={"category_id": category_id})
