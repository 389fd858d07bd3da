"""
Channel membership gate.

Telegram only exposes channel membership to administrators, so the bot must
hold administrator or creator standing in the channel before a user's status
can be read. The check is three sequential round trips:

    getMe -> getChatMember(bot) -> getChatMember(user)

and stops at the first step that fails.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .telegram_api import TelegramAPI
from .logging_config import bot_logger as logger

ELEVATED_STATUSES = {"administrator", "creator"}
MEMBER_STATUSES = {"member", "administrator", "creator"}

BOT_LACKS_STANDING = "bot lacks required standing"


class MembershipStatus(str, Enum):
    MEMBER = "member"
    NOT_MEMBER = "not_member"
    LOOKUP_FAILED = "lookup_failed"


@dataclass
class MembershipCheck:
    status: MembershipStatus
    reason: Optional[str] = None
    bot_ready: bool = False
    bot_status: Optional[str] = None
    user_status: Optional[str] = None

    @property
    def is_member(self) -> bool:
        return self.status is MembershipStatus.MEMBER


async def check_membership(api: TelegramAPI, channel: str, user_id: int) -> MembershipCheck:
    """Verify that user_id is a member of channel. Never raises."""
    me = await api.get_me()
    if not me.ok:
        return MembershipCheck(MembershipStatus.LOOKUP_FAILED, reason=f"getMe failed: {me.reason}")

    bot_id = (me.result or {}).get("id")
    if bot_id is None:
        return MembershipCheck(MembershipStatus.LOOKUP_FAILED, reason="getMe returned no bot id")

    bot_member = await api.get_chat_member(channel, bot_id)
    if not bot_member.ok:
        return MembershipCheck(MembershipStatus.LOOKUP_FAILED, reason=bot_member.reason)

    bot_status = (bot_member.result or {}).get("status")
    if bot_status not in ELEVATED_STATUSES:
        logger.warning(f"Bot status in {channel} is {bot_status}, cannot verify members")
        return MembershipCheck(
            MembershipStatus.NOT_MEMBER,
            reason=BOT_LACKS_STANDING,
            bot_status=bot_status
        )

    user_member = await api.get_chat_member(channel, user_id)
    if not user_member.ok:
        return MembershipCheck(
            MembershipStatus.LOOKUP_FAILED,
            reason=user_member.reason,
            bot_ready=True,
            bot_status=bot_status
        )

    user_status = (user_member.result or {}).get("status")
    status = MembershipStatus.MEMBER if user_status in MEMBER_STATUSES else MembershipStatus.NOT_MEMBER
    logger.info(f"Membership of user_id={user_id} in {channel}: {user_status} -> {status.value}")

    return MembershipCheck(
        status,
        bot_ready=True,
        bot_status=bot_status,
        user_status=user_status
    )
