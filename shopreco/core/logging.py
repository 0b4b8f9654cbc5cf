# shopreco/core/logging.py
import logging
import sys
from typing import Optional

import colorlog

from shopreco.core.config import Settings

LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("pymongo", "motor", "httpx", "httpcore", "openai")


def resolve_level(settings: Settings) -> int:
    if settings.DEBUG:
        return logging.DEBUG
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings, level: Optional[int] = None) -> int:
    """Install one coloured stdout handler on the root logger and return the level used."""
    level = resolve_level(settings) if level is None else level

    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug("logging configured level=%s app=%s", logging.getLevelName(level), settings.APP_NAME)
    return level
