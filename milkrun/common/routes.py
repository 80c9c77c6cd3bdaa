import time
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from milkrun.api import cur_version
from milkrun.common.logging_setup import get_logger
from milkrun.common.utils import now, success_response
from milkrun.config.admin_config import admin_config
from milkrun.db.dependencies import get_session

logger = get_logger("milkrun.health")

home_router = APIRouter()


def _uptime(request: Request) -> float:
    started = getattr(request.app.state, "started_at", None)
    if started is None:
        return 0.0
    return round(time.monotonic() - started, 3)


async def database_state(session: AsyncSession) -> str:
    try:
        await session.execute(select(1))
    except (SQLAlchemyError, OSError) as e:
        logger.error("health.database.unreachable", extra={"error": str(e)})
        return "disconnected"
    return "connected"


@home_router.get("")
async def health_check(request: Request, session: AsyncSession = Depends(get_session)):
    database = await database_state(session)
    return success_response({
        "status": "ok" if database == "connected" else "degraded",
        "timestamp": now(),
        "uptime": _uptime(request),
        "environment": admin_config.ENV,
        "database": database,
        "version": cur_version,
        "service": admin_config.SERVICE_NAME,
    })


@home_router.get("/ready")
async def readiness(session: AsyncSession = Depends(get_session)):
    database = await database_state(session)
    if database != "connected":
        return success_response({"status": "not_ready", "database": database},
                                status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return success_response({"status": "ready", "database": database})


@home_router.get("/live")
async def liveness(request: Request):
    return success_response({"status": "alive", "uptime": _uptime(request)})
