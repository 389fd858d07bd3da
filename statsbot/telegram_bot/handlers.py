"""
Update handlers.

ROUTING (first match wins):
===========================
Callback (button click):
- verify_membership: run the channel gate, then menu or explanation
- btn_bt1/2/3: send a force-reply prompt carrying the query's marker

Message:
- /start: menu for members, welcome + join link for everyone else
- reply quoting a marker: run the stats lookup, relay result, show menu
- anything else: same as /start without the confirmation line

Handlers talk to Telegram through TelegramAPI, which reports failures as
results instead of raising, so a failed send never aborts the rest of a
handler.
"""

from typing import Optional

from telegram import Message

from .context import BotContext
from .dispatcher import QueryType, classify_reply, query_for_callback
from .keyboards import (
    MAIN_MENU_TEXT, VERIFY_CALLBACK,
    force_reply_markup, main_menu_markup, prompt_text, welcome_markup, welcome_text
)
from .membership import MembershipCheck, MembershipStatus, check_membership
from .schemas import CallbackEvent, InboundEvent, MessageEvent
from .logging_config import bot_logger as logger


async def send_main_menu(chat_id: int, ctx: BotContext) -> None:
    await ctx.api.send_message(chat_id, MAIN_MENU_TEXT, reply_markup=main_menu_markup(ctx.settings))


async def send_welcome(chat_id: int, ctx: BotContext) -> None:
    await ctx.api.send_message(chat_id, welcome_text(ctx.settings), reply_markup=welcome_markup(ctx.settings))


async def verify_user(user_id: Optional[int], ctx: BotContext) -> Optional[MembershipCheck]:
    """Run the channel gate for user_id; None when the sender is unknown."""
    if user_id is None:
        return None
    return await check_membership(ctx.api, ctx.settings.channel_username, user_id)


# ============================================
# Callback queries
# ============================================

async def handle_callback_query(event: CallbackEvent, ctx: BotContext) -> None:
    """Handle inline keyboard button presses."""
    query = event.query
    logger.info(f"Callback from user_id={query.from_user.id}: data={query.data}")

    await ctx.api.answer_callback_query(query.id)

    if query.message is None:
        # Button on an inline-mode message, nothing to reply to
        return

    chat_id = query.message.chat.id

    if query.data == VERIFY_CALLBACK:
        await handle_verify_membership(chat_id, query.from_user.id, ctx)
        return

    menu_query = query_for_callback(query.data)
    if menu_query is not None:
        await handle_query_button(chat_id, menu_query, ctx)
        return

    logger.info(f"Ignoring unknown callback data: {query.data}")


async def handle_verify_membership(chat_id: int, user_id: int, ctx: BotContext) -> None:
    """'Verify membership' button: confirm and show menu, or explain why not."""
    channel = ctx.settings.channel_username
    check = await check_membership(ctx.api, channel, user_id)

    if not check.bot_ready:
        await ctx.api.send_message(
            chat_id,
            f"I need to be admin in {channel} to verify membership. "
            f"Current bot status: {check.bot_status or check.reason}"
        )
        return

    if check.is_member:
        await ctx.api.send_message(chat_id, "✅ Verification successful. Showing menu...")
        await send_main_menu(chat_id, ctx)
    elif check.status is MembershipStatus.LOOKUP_FAILED:
        await ctx.api.send_message(
            chat_id,
            f"⚠️ Could not check your membership in {channel}: {check.reason}. Please try Verify again later."
        )
    else:
        await ctx.api.send_message(
            chat_id,
            f"❌ You are not a member of {channel}. Please join and press Verify again."
        )


async def handle_query_button(chat_id: int, query: QueryType, ctx: BotContext) -> None:
    """Menu button: ask for input with a marker-tagged force-reply prompt."""
    await ctx.api.send_message(
        chat_id,
        prompt_text(query, ctx.settings),
        reply_markup=force_reply_markup()
    )


# ============================================
# Messages
# ============================================

async def handle_message(event: MessageEvent, ctx: BotContext) -> None:
    """Route a text message: /start, a prompt reply, or anything else."""
    message = event.message
    user_id = message.from_user.id if message.from_user else None
    text = message.text or ""

    logger.info(f"Message from user_id={user_id} in chat_id={message.chat.id}, text_len={len(text)}")

    if text.startswith("/start"):
        await handle_start_command(message, ctx)
        return

    if message.reply_to_message is not None and message.text:
        query = classify_reply(message.reply_to_message.text)
        if query is not None:
            await handle_lookup_reply(message, query, ctx)
            return

    await handle_default_message(message, ctx)


async def handle_start_command(message: Message, ctx: BotContext) -> None:
    chat_id = message.chat.id
    check = await verify_user(message.from_user.id if message.from_user else None, ctx)

    if check is not None and check.is_member:
        await ctx.api.send_message(chat_id, "Welcome back, verified. Showing menu:")
        await send_main_menu(chat_id, ctx)
    else:
        await send_welcome(chat_id, ctx)


async def handle_lookup_reply(message: Message, query: QueryType, ctx: BotContext) -> None:
    """
    Reply to one of our prompts: run the lookup and relay the result.

    The main menu always follows, whatever the lookup returned.
    """
    chat_id = message.chat.id
    user_input = (message.text or "").strip()

    logger.info(f"Correlated reply to {query.name} in chat_id={chat_id}")

    await ctx.api.send_message(chat_id, "⏳ Sending request...")

    try:
        reply = await ctx.lookup.lookup(query, user_input)
        sent = await ctx.api.send_message(chat_id, reply.text, parse_mode=reply.parse_mode)
        if not sent.ok:
            # Broken Markdown or a body over Telegram's length limit
            logger.warning(f"Result for {query.name} rejected by Telegram: {sent.reason}")
            await ctx.api.send_message(chat_id, f"Could not deliver the result: {sent.reason}")
    except Exception as e:
        logger.error(f"Lookup {query.name} handler error: {e}", exc_info=True)
        await ctx.api.send_message(chat_id, f"Request error: {str(e)[:200]}")

    await send_main_menu(chat_id, ctx)


async def handle_default_message(message: Message, ctx: BotContext) -> None:
    """Anything unrecognised: menu for members, welcome otherwise."""
    chat_id = message.chat.id
    check = await verify_user(message.from_user.id if message.from_user else None, ctx)

    if check is not None and check.is_member:
        await send_main_menu(chat_id, ctx)
    else:
        await send_welcome(chat_id, ctx)


async def route_event(event: InboundEvent, ctx: BotContext) -> None:
    """Dispatch a decoded event to its handler. Unknown events are dropped."""
    if isinstance(event, CallbackEvent):
        await handle_callback_query(event, ctx)
    elif isinstance(event, MessageEvent):
        await handle_message(event, ctx)
    else:
        logger.info(f"Ignoring update with fields: {event.update_keys}")
