"""
Telegram bot module for the stats lookup service.

ARCHITECTURE: stateless webhook router
- Receives one update per webhook call
- Decodes it into a callback, a message, or nothing we handle
- Gates the menu behind channel membership
- Correlates prompt replies by the marker echoed in reply_to_message
- Relays the stats API response back to the chat
"""

from .bot import handle_telegram_update
from .context import BotContext, get_bot_context
from .membership import MembershipCheck, MembershipStatus, check_membership
from .dispatcher import QueryType, classify_reply
from .lookup import LookupClient
from .telegram_api import TelegramAPI, ApiResult

__all__ = [
    "handle_telegram_update",
    "BotContext",
    "get_bot_context",
    "MembershipCheck",
    "MembershipStatus",
    "check_membership",
    "QueryType",
    "classify_reply",
    "LookupClient",
    "TelegramAPI",
    "ApiResult",
]
