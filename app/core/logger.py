# app/core/logger.py
import logging
from core.config import settings

_level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

logger = logging.getLogger("layer-distributor")
logger.setLevel(_level)
logger.propagate = False

# Lambda ships stdout to CloudWatch, so a console handler is all we need
_console = logging.StreamHandler()
_console.setLevel(_level)
_console.setFormatter(logging.Formatter(
    fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
))
logger.addHandler(_console)
