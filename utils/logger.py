# -*- coding: utf-8 -*-
"""
Logging for the onboarding pipeline.

Every module logs through a child of the "stellium" logger. Records go to
a rotating file under Config.LOGS_DIR and, from Config.LOG_LEVEL up, to
stdout.

HTTP calls log one `[API REQ]` line before sending and one `[API RES]` or
`[API ERR]` line after. API keys and bearer tokens are never part of a
logged line.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

APP_LOGGER_NAME = "stellium"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """(Re)build the app logger from the current Config."""
    global _logger

    # app.config must not import this module at load time
    from app.config import Config

    Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Full detail, including request/response lines, stays in the file
    file_handler = RotatingFileHandler(
        Config.LOG_PATH,
        maxBytes=Config.LOG_MAX_BYTES,
        backupCount=Config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter("%(levelname)-8s | %(message)s"))
    logger.addHandler(console_handler)

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the app logger, e.g. "stellium.services.places_service"."""
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger.getChild(name)
