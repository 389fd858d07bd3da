"""
Stats lookup client.

Builds a request URL from one of the three configured templates, makes a
single GET (no retries) and turns whatever comes back into a chat reply.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from statsbot.config import Settings, get_settings
from .dispatcher import QueryType
from .logging_config import bot_logger as logger

MAX_RESULT_CHARS = 4000
TRUNCATION_MARKER = "\n... (truncated)"

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass
class LookupReply:
    text: str
    parse_mode: Optional[str] = None


def build_url(template: str, **params: str) -> str:
    """Substitute URL-encoded values into every {name} slot of template."""
    url = template
    for name, value in params.items():
        url = url.replace(f"{{{name}}}", quote(str(value), safe=_URI_COMPONENT_SAFE))
    return url


def shorten_json(data: Any, limit: int = MAX_RESULT_CHARS) -> str:
    """Pretty-print data, cutting it at limit characters."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


def template_for(query: QueryType, settings: Settings) -> str:
    return {
        QueryType.BT1: settings.bt1_template,
        QueryType.BT2: settings.bt2_template,
        QueryType.BT3: settings.bt3_template,
    }[query]


class LookupClient:
    """Client for the third-party stats API."""

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            follow_redirects=True
        )

    def url_for(self, query: QueryType, user_input: str) -> str:
        return build_url(template_for(query, self.settings), **{query.param: user_input})

    async def lookup(self, query: QueryType, user_input: str) -> LookupReply:
        """
        Run one lookup and format the outcome for the chat.

        Network errors are returned as a reply, not raised.
        """
        url = self.url_for(query, user_input)
        logger.info(f"Lookup {query.name}: GET {url}")

        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Lookup {query.name} failed: {e}")
            return LookupReply(f"Request error: {str(e) or type(e).__name__}")

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                data = response.json()
            except ValueError:
                logger.warning(f"Lookup {query.name} declared JSON but body did not parse")
            else:
                return LookupReply(f"Result:\n```{shorten_json(data)}```", parse_mode="Markdown")

        return LookupReply(f"Non-JSON response:\n{response.text}")

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()


# Global instance
_lookup_client: Optional[LookupClient] = None


def get_lookup_client() -> LookupClient:
    """Get or create lookup client singleton."""
    global _lookup_client
    if _lookup_client is None:
        _lookup_client = LookupClient()
    return _lookup_client


async def close_lookup_client() -> None:
    global _lookup_client
    if _lookup_client is not None:
        await _lookup_client.close()
        _lookup_client = None
