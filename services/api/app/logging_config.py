"""Logging setup for the canteen API.

Console output always; an extra file handler when CANTEEN_LOG_FILE is set.
"""

from __future__ import annotations

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"


def setup_logging() -> None:
    """Configure the root logger once for the whole process.

    Level comes from CANTEEN_LOG_LEVEL (default INFO). SQLAlchemy's engine logger stays at
    WARNING so statements are not echoed at INFO.
    """

    level_name = os.getenv("CANTEEN_LOG_LEVEL", "INFO").strip().upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = os.getenv("CANTEEN_LOG_FILE", "").strip()
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=_LOG_FORMAT, handlers=handlers)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
