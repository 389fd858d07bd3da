"""
Logging configuration for the webhook bot.
"""

import logging
import sys

from statsbot.config import get_settings


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the "telegram_bot" logger."""

    logger = logging.getLogger("telegram_bot")
    logger.setLevel((level or get_settings().log_level).upper())

    # Module may be re-imported under uvicorn --reload
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)

    # Hosting platforms already capture stdout; root handlers would double every line
    logger.propagate = False

    return logger

# Global logger instance
bot_logger = setup_logging()
