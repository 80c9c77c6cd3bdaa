import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from milkrun.api import version_prefix, cur_version
from milkrun.api.routers import public_routers, admin_routers
from milkrun.common.custom_exceptions import register_all_exceptions
from milkrun.common.logging_setup import setup_logging, stop_logging
from milkrun.config.admin_config import admin_config
from milkrun.config.settings import config_settings
from milkrun.db.connection import async_engine, async_session, create_tables
from milkrun.middlewares.auth_middleware import AuthenticationMiddleware
from milkrun.middlewares.request_id_middleware import RequestIdMiddleware


PUBLIC_PATHS = [
    f"{version_prefix}/auth/request-otp",
    f"{version_prefix}/auth/verify-otp",
    f"{version_prefix}/auth/login",
    f"{version_prefix}/auth/refresh",
    f"{version_prefix}/auth/delivery-boy/",
    f"{version_prefix}/admin/login",
    f"{version_prefix}/health",
    "/docs",
    "/redoc",
    "/openapi.json",
]

# catalog and plan listings are browsable without an account
PUBLIC_READ_PATHS = [
    f"{version_prefix}/subscriptions/plans",
    f"{version_prefix}/categories",
    f"{version_prefix}/products",
]


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    log = setup_logging()
    app.state.started_at = time.monotonic()

    if config_settings.CREATE_TABLES:
        await create_tables()

    log.info("app.startup", extra={"env": admin_config.ENV, "version": cur_version})
    try:
        yield
    finally:
        await async_engine.dispose()
        log.info("app.shutdown")
        stop_logging()


def create_app():
    app = FastAPI(
        title="Milkrun",
        version=cur_version,
        lifespan=app_lifespan)

    app.include_router(public_routers)

    if admin_config.ENABLE_ADMIN:
        app.include_router(admin_routers)      # mounts /api/v1/admin

    # last added runs first: request id wraps auth so rejections carry the id too
    app.add_middleware(AuthenticationMiddleware, session_maker=async_session,
                       paths=PUBLIC_PATHS, read_only_paths=PUBLIC_READ_PATHS)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(CORSMiddleware, allow_origins=config_settings.CORS_ORIGINS,
                       allow_credentials=True, allow_methods=["*"], allow_headers=["*"])
    register_all_exceptions(app)

    return app

app = create_app()
