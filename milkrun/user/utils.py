from typing import Any, Dict
from milkrun.schema.full_schema import Users

# never leave the service
_PRIVATE_FIELDS = {"password_hash", "refresh_token_hash", "id", "deleted_at"}


def serialize_user(user: Users) -> Dict[str, Any]:
    data = user.model_dump(exclude=_PRIVATE_FIELDS)
    data["public_id"] = str(user.public_id)
    return data
