"""Pytest configuration and fixtures."""

import json

import httpx
import pytest
import pytest_asyncio

from statsbot.config import Settings
from statsbot.telegram_bot.context import BotContext
from statsbot.telegram_bot.lookup import LookupClient
from statsbot.telegram_bot.telegram_api import TelegramAPI

BOT_ID = 999
USER_ID = 42
CHAT_ID = 4242
TOKEN = "123:TEST"
DATE = 1700000000
MAX_MESSAGE_LENGTH = 4096


class FakeTelegram:
    """
    In-process Bot API.

    Records every call as (method, payload). getChatMember answers with
    bot_status for the bot and user_status for anyone else; a status of None
    answers ok=false. Methods listed in `down` raise a transport error.
    sendMessage rejects texts over the length limit and Markdown with an
    unclosed code block, as the real API does.
    """

    def __init__(self, bot_status="administrator", user_status="member", down=()):
        self.bot_status = bot_status
        self.user_status = user_status
        self.down = set(down)
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        payload = json.loads(request.content or b"{}")
        self.calls.append((method, payload))

        if method in self.down:
            raise httpx.ConnectError("connection refused", request=request)

        if method == "getMe":
            return httpx.Response(200, json={"ok": True, "result": {"id": BOT_ID, "is_bot": True}})

        if method == "getChatMember":
            status = self.bot_status if payload["user_id"] == BOT_ID else self.user_status
            if status is None:
                return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})
            return httpx.Response(200, json={"ok": True, "result": {"status": status}})

        if method == "sendMessage":
            if len(payload.get("text", "")) > MAX_MESSAGE_LENGTH:
                return httpx.Response(400, json={"ok": False, "description": "Bad Request: message is too long"})
            if payload.get("parse_mode") == "Markdown" and payload["text"].count("```") % 2:
                return httpx.Response(400, json={"ok": False, "description": "Bad Request: can't parse entities"})
            return httpx.Response(200, json={"ok": True, "result": {"message_id": len(self.calls)}})

        return httpx.Response(200, json={"ok": True, "result": True})

    def methods(self):
        return [method for method, _ in self.calls]

    @property
    def sends(self):
        return [payload for method, payload in self.calls if method == "sendMessage"]


class FakeStatsAPI:
    """Stats API stand-in; `response` is an httpx.Response or an exception."""

    def __init__(self, response=None):
        self.response = response if response is not None else httpx.Response(200, json={"nickname": "player"})
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        telegram_bot_token=TOKEN,
        channel_username="@statschannel",
        channel_invite_url="https://t.me/+invite",
        bt1_label="Ranked",
        bt2_label="Showcase",
        bt3_label="Search",
    )


@pytest.fixture
def telegram():
    return FakeTelegram()


@pytest.fixture
def stats_api():
    return FakeStatsAPI()


def make_context(settings, telegram, stats_api) -> BotContext:
    api = TelegramAPI(
        TOKEN,
        client=httpx.AsyncClient(transport=httpx.MockTransport(telegram.handler))
    )
    lookup = LookupClient(
        settings,
        client=httpx.AsyncClient(transport=httpx.MockTransport(stats_api.handler))
    )
    return BotContext(api=api, lookup=lookup, settings=settings)


@pytest_asyncio.fixture
async def ctx(settings, telegram, stats_api):
    context = make_context(settings, telegram, stats_api)
    yield context
    await context.api.close()
    await context.lookup.close()


def message_update(text, user_id=USER_ID, reply_to_text=None):
    message = {
        "message_id": 10,
        "date": DATE,
        "chat": {"id": CHAT_ID, "type": "private"},
        "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
        "text": text,
    }
    if reply_to_text is not None:
        message["reply_to_message"] = {
            "message_id": 9,
            "date": DATE,
            "chat": {"id": CHAT_ID, "type": "private"},
            "from": {"id": BOT_ID, "is_bot": True, "first_name": "Bot"},
            "text": reply_to_text,
        }
    return {"update_id": 1, "message": message}


def callback_update(data, user_id=USER_ID, with_message=True):
    query = {
        "id": "cb-1",
        "chat_instance": "-100200300",
        "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
        "data": data,
    }
    if with_message:
        query["message"] = {
            "message_id": 8,
            "date": DATE,
            "chat": {"id": CHAT_ID, "type": "private"},
            "text": "Main menu, choose an option:",
        }
    return {"update_id": 2, "callback_query": query}
