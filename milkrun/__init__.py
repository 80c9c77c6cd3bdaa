import logging

logger = logging.getLogger("milkrun")
