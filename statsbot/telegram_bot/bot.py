"""
Webhook update entry point.
"""

from typing import Any

from .context import BotContext
from .handlers import route_event
from .schemas import decode_event
from .logging_config import bot_logger as logger


async def handle_telegram_update(update_data: Any, ctx: BotContext) -> None:
    """
    Process one incoming webhook update from Telegram.

    Called by the FastAPI webhook endpoint. Never raises: the endpoint must
    answer 200 whatever happens, or Telegram keeps redelivering the update.
    """
    try:
        event = decode_event(update_data)
        await route_event(event, ctx)
    except Exception as e:
        logger.error(f"Failed to process update: {e}", exc_info=True)
