# src/common/logger_config.py
"""Application-wide logging configuration."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from src.common.config.settings import settings


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """
    Routes all application loggers through a single RichHandler.

    The level comes from ``level`` when given (e.g. a CLI flag), otherwise from
    ``settings.LOG_LEVEL``. Unknown level names fall back to INFO.
    """
    log_level_str = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_word_wrap=True,
        tracebacks_suppress=[
            logging,
        ],
    )

    # Replace rather than stack handlers when called more than once
    root_logger.handlers = [rich_handler]

    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
