from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import require_roles
from milkrun.categories.models import CategoryCreateIn, CategoryUpdateIn
from milkrun.categories.repository import get_category_by_slug, list_categories
from milkrun.categories.services import create_category, delete_category, require_category, update_category
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.schema.full_schema import UserRole

categories_router = APIRouter()


@categories_router.post("", status_code=status.HTTP_201_CREATED, dependencies=[require_roles(UserRole.ADMIN)])
async def add_category(payload: CategoryCreateIn, session: AsyncSession = Depends(get_session)):
    return success_response(await create_category(session, payload.model_dump()), 201)


@categories_router.get("")
async def get_categories(is_active: Optional[bool] = Query(None), session: AsyncSession = Depends(get_session)):
    return success_response(await list_categories(session, is_active=is_active))


@categories_router.get("/slug/{slug}")
async def get_category_slug(slug: str, session: AsyncSession = Depends(get_session)):
    category = await get_category_by_slug(session, slug)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(category)


@categories_router.get("/{category_id}")
async def get_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return success_response(await require_category(session, category_id))


@categories_router.patch("/{category_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def patch_category(category_id: int, payload: CategoryUpdateIn, session: AsyncSession = Depends(get_session)):
    category = await update_category(session, category_id, payload.model_dump(exclude_unset=True))
    return success_response(category)


@categories_router.delete("/{category_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def remove_category(category_id: int, session: AsyncSession = Depends(get_session)):
    await delete_category(session, category_id)
    return success_response({"message": "Category deleted"})
