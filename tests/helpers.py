import itertools
from milkrun.auth.utils import create_access_token

url_prefix = "/api/v1"

_phones = itertools.count(9100000000)


def next_phone() -> str:
    return str(next(_phones))


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
