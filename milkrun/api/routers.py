from fastapi import APIRouter
from milkrun.api import version_prefix
from milkrun.auth.routes import auth_router
from milkrun.user.routes import user_router
from milkrun.addresses.routes import addresses_router
from milkrun.categories.routes import categories_router
from milkrun.products.routes import products_router
from milkrun.cart.routes import carts_router
from milkrun.orders.routes import orders_router
from milkrun.subscriptions.routes import subscriptions_router
from milkrun.delivery.routes import delivery_router
from milkrun.admin.routes import admin_router
from milkrun.common.routes import home_router


public_routers = APIRouter(prefix=version_prefix)

public_routers.include_router(auth_router, prefix="/auth", tags=["auth"])
public_routers.include_router(user_router, prefix="/users", tags=["users"])
public_routers.include_router(addresses_router, prefix="/addresses", tags=["addresses"])
public_routers.include_router(categories_router, prefix="/categories", tags=["categories"])
public_routers.include_router(products_router, prefix="/products", tags=["products"])
public_routers.include_router(carts_router, prefix="/cart", tags=["cart"])
public_routers.include_router(orders_router, prefix="/orders", tags=["orders"])
public_routers.include_router(subscriptions_router, prefix="/subscriptions", tags=["subscriptions"])
public_routers.include_router(delivery_router, prefix="/delivery", tags=["delivery"])
public_routers.include_router(home_router, prefix="/health", tags=["health"])

#--------------------------------------------------------------------------------------------------------

admin_routers = APIRouter(prefix=f"{version_prefix}/admin")

admin_routers.include_router(admin_router, tags=["admin"])
