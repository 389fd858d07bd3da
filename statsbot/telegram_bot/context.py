"""
Collaborators for handling one webhook update.

Nothing here outlives the request except the shared HTTP clients; all
conversational state travels inside the messages themselves.
"""

from dataclasses import dataclass, field

from statsbot.config import Settings, get_settings
from .telegram_api import TelegramAPI, get_telegram_api
from .lookup import LookupClient, get_lookup_client


@dataclass
class BotContext:
    api: TelegramAPI
    lookup: LookupClient
    settings: Settings = field(default_factory=get_settings)


def get_bot_context() -> BotContext:
    """Build the default context from the process-wide clients."""
    return BotContext(api=get_telegram_api(), lookup=get_lookup_client())
