"""
Reply markups and fixed texts sent by the bot.
"""

from statsbot.config import Settings
from .dispatcher import QueryType

VERIFY_CALLBACK = "verify_membership"

MAIN_MENU_TEXT = "Main menu, choose an option:"


def main_menu_markup(settings: Settings) -> dict:
    """One row with the three query buttons."""
    labels = {
        QueryType.BT1: settings.bt1_label,
        QueryType.BT2: settings.bt2_label,
        QueryType.BT3: settings.bt3_label,
    }
    return {
        "inline_keyboard": [
            [{"text": labels[query], "callback_data": query.value} for query in QueryType]
        ]
    }


def welcome_text(settings: Settings) -> str:
    return f"Welcome! Please join the channel {settings.channel_username} and press Verify."


def welcome_markup(settings: Settings) -> dict:
    return {
        "inline_keyboard": [
            [{"text": "Open channel", "url": settings.channel_invite_url}],
            [{"text": "Verify membership", "callback_data": VERIFY_CALLBACK}]
        ]
    }


def force_reply_markup() -> dict:
    # selective: only the user who pressed the button gets the reply prompt
    return {"force_reply": True, "selective": True}


def prompt_text(query: QueryType, settings: Settings) -> str:
    """Prompt for a query, prefixed by its correlation marker."""
    if query is QueryType.BT1:
        prompt = f"Send UID to query (for {settings.bt1_label}). Reply to this message."
    elif query is QueryType.BT2:
        prompt = f"Send UID to query (for {settings.bt2_label}). Reply to this message."
    else:
        prompt = f"Send keyword to search (for {settings.bt3_label}). Reply to this message."
    return f"{query.marker}\n{prompt}"
