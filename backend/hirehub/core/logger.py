import logging
import sys
from typing import Optional

from hirehub.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a named console logger, attaching the handler only once."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(level or settings.LOG_LEVEL)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


app_logger = setup_logger("hirehub")
