from milkrun.common.logging_setup import get_logger
from milkrun.config.settings import config_settings

logger = get_logger("milkrun.otp")

OTP_EXPIRY_MINUTES = int(config_settings.OTP_EXPIRY_MINUTES)
OTP_MAX_ATTEMPTS = int(config_settings.OTP_MAX_ATTEMPTS)
OTP_LENGTH = int(config_settings.OTP_LENGTH)
