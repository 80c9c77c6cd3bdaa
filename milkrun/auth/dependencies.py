from fastapi import Request, HTTPException, status, Depends
from fastapi.security import HTTPBearer
from milkrun.auth.utils import decode_access_token


class Authentication(HTTPBearer):
    def __init__(self, auto_error=True):
        super().__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> dict:
        auth_creds = await super().__call__(request)
        if auth_creds is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

        decoded_token = decode_access_token(auth_creds.credentials)

        if not decoded_token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token provided.")

        return decoded_token


def require_roles(*roles):
    allowed = {getattr(r, "value", r) for r in roles}

    async def _checker(request: Request):
        user_role = getattr(request.state, "user_role", None)
        if user_role is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        if user_role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role for this operation")
        return True

    return Depends(_checker)


def current_user_id(request: Request) -> int:
    user_id = getattr(request.state, "user_identifier", None)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id
