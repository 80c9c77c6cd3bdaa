from typing import Iterable, Optional
from fastapi import HTTPException, Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from milkrun.auth.dependencies import Authentication
from milkrun.common.constants import request_id_ctx
from milkrun.common.utils import build_error, json_error
from milkrun.user.repository import get_active_user_by_public_id
from milkrun.middlewares.constants import logger


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolves the bearer access token into the calling user before any handler runs.

    ``paths`` are skipped for every method, ``read_only_paths`` only for GET.
    """

    def __init__(self, app, *, session_maker, paths: Iterable[str], read_only_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.session_maker = session_maker
        self.paths = tuple(paths)
        self.read_only_paths = tuple(read_only_paths or ())

    def _is_public(self, request: Request) -> bool:
        path = request.url.path
        if request.method == "OPTIONS":
            return True
        if any(path.startswith(p) for p in self.paths):
            return True
        if request.method in ("GET", "HEAD") and any(path.startswith(p) for p in self.read_only_paths):
            return True
        return False

    def _reject(self, message: str):
        payload = build_error(code="INVALID_AUTH", details={"message": message}, request_id=request_id_ctx.get())
        return json_error(payload, status_code=status.HTTP_401_UNAUTHORIZED)

    async def dispatch(self, request: Request, call_next):

        if self._is_public(request):
            return await call_next(request)

        try:
            claims = await Authentication()(request)
        except HTTPException as e:
            logger.warning("auth.middleware.failed", extra={
                "reason": e.detail,
                "path": request.url.path,
                "method": request.method,
            })
            return self._reject("Missing or invalid auth headers")

        user_pid = claims.get("sub")

        async with self.session_maker() as session:
            user = await get_active_user_by_public_id(session, user_pid)

        if not user:
            logger.warning("auth.middleware.user_not_found", extra={
                "user_public_id": user_pid,
                "path": request.url.path,
            })
            return self._reject("User not found or inactive")

        request.state.user_identifier = user.id
        request.state.user_public_id = str(user.public_id)
        request.state.user_role = user.role

        logger.debug("auth.middleware.success", extra={
            "user_public_id": user_pid,
            "path": request.url.path,
        })

        return await call_next(request)
