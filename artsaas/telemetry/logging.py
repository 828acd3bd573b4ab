"""
Logging setup.
- INFO by default; LOG_LEVEL overrides.
- Timestamped format with the logger name.
- Aligns uvicorn loggers so their level matches.
"""
import logging

from ..core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def setup_logging() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
    for uv_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uv_logger).setLevel(settings.LOG_LEVEL)
