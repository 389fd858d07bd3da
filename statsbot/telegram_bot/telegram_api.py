"""
Telegram Bot API client.

Every method is a JSON POST to /bot<token>/<method>. Calls never raise:
transport errors and ok=false replies both come back as a failed ApiResult
carrying a human-readable description.
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from statsbot.config import get_settings
from .logging_config import bot_logger as logger


@dataclass
class ApiResult:
    ok: bool
    result: Any = None
    description: Optional[str] = None

    @property
    def reason(self) -> str:
        return self.description or "unknown error"


class TelegramAPI:
    """Thin async wrapper over the Bot API methods the router needs."""

    def __init__(self, token: str, base_url: str = "https://api.telegram.org",
                 timeout: float = 15.0, client: httpx.AsyncClient | None = None):
        if not token:
            logger.error("TELEGRAM_BOT_TOKEN is not set. Outgoing Telegram calls will fail.")
        self.base_url = f"{base_url.rstrip('/')}/bot{token}"
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def call(self, method: str, payload: dict | None = None) -> ApiResult:
        """
        Call a Bot API method.

        Args:
            method: Bot API method name (sendMessage, getChatMember, ...)
            payload: JSON body

        Returns:
            ApiResult with the decoded `result` on success
        """
        try:
            response = await self.client.post(f"{self.base_url}/{method}", json=payload or {})
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"{method} failed: {e}")
            return ApiResult(ok=False, description=str(e) or type(e).__name__)

        if not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description") if isinstance(data, dict) else None
            logger.warning(f"{method} returned error: {description}")
            return ApiResult(ok=False, description=description or f"{method} failed")

        return ApiResult(ok=True, result=data.get("result"))

    async def get_me(self) -> ApiResult:
        return await self.call("getMe")

    async def get_chat_member(self, chat_id: int | str, user_id: int) -> ApiResult:
        return await self.call("getChatMember", {"chat_id": chat_id, "user_id": user_id})

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: Optional[dict] = None,
        parse_mode: Optional[str] = None
    ) -> ApiResult:
        """
        Send message to a chat.

        Args:
            chat_id: Telegram chat ID
            text: Message text
            reply_markup: Inline keyboard or force-reply markup
            parse_mode: Optional parse mode (Markdown, HTML)
        """
        payload = {
            "chat_id": chat_id,
            "text": text
        }

        if reply_markup:
            payload["reply_markup"] = reply_markup

        if parse_mode:
            payload["parse_mode"] = parse_mode

        return await self.call("sendMessage", payload)

    async def answer_callback_query(self, callback_query_id: str) -> ApiResult:
        """Clear the loading spinner on the pressed button."""
        return await self.call("answerCallbackQuery", {"callback_query_id": callback_query_id})

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()


# Global instance
_telegram_api: Optional[TelegramAPI] = None


def get_telegram_api() -> TelegramAPI:
    """Get or create Telegram API client singleton."""
    global _telegram_api
    if _telegram_api is None:
        settings = get_settings()
        _telegram_api = TelegramAPI(
            settings.telegram_bot_token,
            base_url=settings.telegram_api_base,
            timeout=settings.request_timeout
        )
    return _telegram_api


async def close_telegram_api() -> None:
    global _telegram_api
    if _telegram_api is not None:
        await _telegram_api.close()
        _telegram_api = None
