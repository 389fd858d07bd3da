"""
Reply correlation.

The bot keeps no session state. When a menu button is pressed, the prompt
it sends starts with a marker token for the chosen query and asks the client
to force a reply. The user's answer arrives with the prompt echoed in
reply_to_message.text, and the marker in that echo tells us which query the
answer belongs to. If the client drops or trims the echo the reply is
treated as an ordinary message.
"""

from enum import Enum
from typing import Optional


class QueryType(str, Enum):
    """Menu query; the value doubles as the button's callback_data."""

    BT1 = "btn_bt1"
    BT2 = "btn_bt2"
    BT3 = "btn_bt3"

    @property
    def marker(self) -> str:
        return f"__RES_{self.name}__"

    @property
    def param(self) -> str:
        """Template slot the user's input is substituted into."""
        return "keyword" if self is QueryType.BT3 else "uid"


def query_for_callback(data: Optional[str]) -> Optional[QueryType]:
    """Map a callback_data string to its query, if it is a menu button."""
    try:
        return QueryType(data)
    except ValueError:
        return None


def classify_reply(replied_text: Optional[str]) -> Optional[QueryType]:
    """
    Find which query a reply belongs to.

    Args:
        replied_text: text of the message the user replied to

    Returns:
        First query (BT1, BT2, BT3 order) whose marker appears in the text,
        or None when the reply is not correlated to a prompt
    """
    if not replied_text:
        return None

    for query in QueryType:
        if query.marker in replied_text:
            return query

    return None
