# cryptcodec/utils/logging.py
import logging

from ..config import settings

logger = logging.getLogger("cryptcodec")
logger.setLevel(settings.LOG_LEVEL.upper())
# host application owns handlers
logger.addHandler(logging.NullHandler())
