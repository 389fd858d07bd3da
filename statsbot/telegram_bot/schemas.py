"""
Inbound update decoding.

Updates are parsed with python-telegram-bot's Update.de_json and resolved
into one of three variants: CallbackEvent, MessageEvent or UnknownEvent.
No Bot instance is attached; handlers reply through TelegramAPI instead of
the library's shortcut methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from telegram import CallbackQuery, Message, Update

from .logging_config import bot_logger as logger


@dataclass
class CallbackEvent:
    """Inline keyboard button click."""
    query: CallbackQuery


@dataclass
class MessageEvent:
    """Text message, possibly a reply to one of our prompts."""
    message: Message


@dataclass
class UnknownEvent:
    """Any update shape the router does not act on."""
    update_keys: list[str] = field(default_factory=list)


InboundEvent = Union[CallbackEvent, MessageEvent, UnknownEvent]


def decode_event(payload: Any) -> InboundEvent:
    """
    Resolve a raw update dict into an event variant.

    callback_query wins over message when both are present. Malformed
    payloads decode to UnknownEvent instead of raising.
    """
    if not isinstance(payload, dict):
        return UnknownEvent()

    unknown = UnknownEvent(update_keys=sorted(payload.keys()))
    if not (payload.get("callback_query") or payload.get("message")):
        return unknown

    try:
        update = Update.de_json(payload, None)
    except Exception as e:
        logger.warning(f"Unparseable update {payload.get('update_id')}: {e}")
        return unknown

    if update is None:
        return unknown

    query = update.callback_query
    if query is not None:
        if query.from_user is None:
            logger.warning(f"Callback {query.id} has no sender, ignoring")
            return unknown
        return CallbackEvent(query=query)

    message = update.message
    if message is not None:
        if message.chat is None:
            logger.warning(f"Message {message.message_id} has no chat, ignoring")
            return unknown
        return MessageEvent(message=message)

    return unknown
