from milkrun.common.logging_setup import get_logger

logger = get_logger("milkrun.auth")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
