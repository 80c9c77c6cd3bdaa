from milkrun.common.logging_setup import get_logger

logger = get_logger("milkrun.delivery")
