"""
Tests for the channel membership gate.
"""

import pytest

from statsbot.telegram_bot.membership import (
    BOT_LACKS_STANDING,
    MembershipStatus,
    check_membership,
)

from conftest import BOT_ID, USER_ID

CHANNEL = "@statschannel"


@pytest.mark.asyncio
@pytest.mark.parametrize("user_status", ["member", "administrator", "creator"])
async def test_member_statuses(ctx, telegram, user_status):
    telegram.user_status = user_status

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.MEMBER
    assert check.is_member
    assert check.bot_ready
    assert check.user_status == user_status


@pytest.mark.asyncio
@pytest.mark.parametrize("user_status", ["left", "kicked", "restricted"])
async def test_non_member_statuses(ctx, telegram, user_status):
    telegram.user_status = user_status

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.NOT_MEMBER
    assert not check.is_member
    assert check.bot_ready


@pytest.mark.asyncio
async def test_three_sequential_calls(ctx, telegram):
    await check_membership(ctx.api, CHANNEL, USER_ID)

    assert telegram.calls == [
        ("getMe", {}),
        ("getChatMember", {"chat_id": CHANNEL, "user_id": BOT_ID}),
        ("getChatMember", {"chat_id": CHANNEL, "user_id": USER_ID}),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("bot_status", ["member", "left", "restricted"])
async def test_bot_without_standing_is_not_member(ctx, telegram, bot_status):
    """User status is irrelevant when the bot cannot read it."""
    telegram.bot_status = bot_status
    telegram.user_status = "creator"

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.NOT_MEMBER
    assert check.reason == BOT_LACKS_STANDING
    assert check.bot_status == bot_status
    assert not check.bot_ready
    assert telegram.methods() == ["getMe", "getChatMember"]


@pytest.mark.asyncio
async def test_bot_creator_is_enough(ctx, telegram):
    telegram.bot_status = "creator"
    check = await check_membership(ctx.api, CHANNEL, USER_ID)
    assert check.is_member


@pytest.mark.asyncio
async def test_get_me_transport_failure(ctx, telegram):
    telegram.down = {"getMe"}

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.LOOKUP_FAILED
    assert "connection refused" in check.reason
    assert not check.bot_ready
    assert telegram.methods() == ["getMe"]


@pytest.mark.asyncio
async def test_bot_lookup_api_error(ctx, telegram):
    telegram.bot_status = None

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.LOOKUP_FAILED
    assert check.reason == "Bad Request: chat not found"
    assert not check.bot_ready


@pytest.mark.asyncio
async def test_user_lookup_api_error(ctx, telegram):
    telegram.user_status = None

    check = await check_membership(ctx.api, CHANNEL, USER_ID)

    assert check.status is MembershipStatus.LOOKUP_FAILED
    assert check.reason == "Bad Request: chat not found"
    assert check.bot_ready
