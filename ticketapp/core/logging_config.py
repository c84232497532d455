import logging
import sys
from typing import Optional

from .config import settings


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Sets up the application logger with a single console handler.
    Calling it again only changes the level.
    """
    logger = logging.getLogger("ticketapp")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logger.addHandler(console_handler)
    return logger


logger = setup_logging()
