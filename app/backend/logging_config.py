"""Logging setup for the API process."""

import logging
from typing import Optional

from config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.

    Level precedence: explicit `level` argument, then LOG_LEVEL, then INFO.
    Unknown level names fall back to INFO.
    """
    global _configured
    if _configured:
        return

    level_name = (level or get_log_level()).upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    logging.basicConfig(level=level_value, format=LOG_FORMAT)
    _configured = True
