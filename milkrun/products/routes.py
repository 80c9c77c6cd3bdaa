from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.auth.dependencies import require_roles
from milkrun.common.utils import success_response
from milkrun.db.dependencies import get_session
from milkrun.products.models import ProductCreateIn, ProductUpdateIn
from milkrun.products.repository import get_product_by_slug, list_products
from milkrun.products.services import create_product, delete_product, require_product, update_product
from milkrun.schema.full_schema import UserRole

products_router = APIRouter()


@products_router.post("", status_code=status.HTTP_201_CREATED, dependencies=[require_roles(UserRole.ADMIN)])
async def add_product(payload: ProductCreateIn, session: AsyncSession = Depends(get_session)):
    return success_response(await create_product(session, payload.model_dump()), 201)


@products_router.get("")
async def get_products(category_id: Optional[int] = Query(None), is_featured: Optional[bool] = Query(None),
                       session: AsyncSession = Depends(get_session)):
    return success_response(await list_products(session, category_id=category_id, is_featured=is_featured))


@products_router.get("/slug/{slug}")
async def get_product_slug(slug: str, session: AsyncSession = Depends(get_session)):
    product = await get_product_by_slug(session, slug)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return success_response(product)


@products_router.get("/{product_id}")
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    return success_response(await require_product(session, product_id))


@products_router.patch("/{product_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def patch_product(product_id: int, payload: ProductUpdateIn, session: AsyncSession = Depends(get_session)):
    product = await update_product(session, product_id, payload.model_dump(exclude_unset=True))
    return success_response(product)


@products_router.delete("/{product_id}", dependencies=[require_roles(UserRole.ADMIN)])
async def remove_product(product_id: int, session: AsyncSession = Depends(get_session)):
    await delete_product(session, product_id)
    return success_response({"message": "Product deleted"})
