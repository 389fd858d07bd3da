from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from statsbot import __version__
from statsbot.config import get_settings
from statsbot.telegram_bot import BotContext, get_bot_context, handle_telegram_update
from statsbot.telegram_bot.logging_config import bot_logger as logger
from statsbot.telegram_bot.lookup import close_lookup_client
from statsbot.telegram_bot.telegram_api import close_telegram_api

app = FastAPI(
    title="Stats Bot Webhook",
    description="Channel-gated stats lookup bot for Telegram",
    version=__version__
)


# Lifecycle events
@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    if not settings.telegram_bot_token:
        logger.error("TELEGRAM_BOT_TOKEN is not set. Set it in the environment.")
    logger.info(f"[STARTUP] Webhook ready, gating on {settings.channel_username}")


@app.on_event("shutdown")
async def shutdown_event():
    """Close shared HTTP clients."""
    await close_telegram_api()
    await close_lookup_client()
    logger.info("[SHUTDOWN] HTTP clients closed")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Stats Bot Webhook",
        "webhook": "/telegram/webhook"
    }


@app.api_route(
    "/telegram/webhook",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_class=PlainTextResponse
)
async def telegram_webhook_other_methods():
    """Non-POST requests just get a trivial 200."""
    return "ok"


# Telegram webhook endpoint
@app.post("/telegram/webhook")
async def telegram_webhook(request: Request, ctx: BotContext = Depends(get_bot_context)):
    """
    Webhook endpoint for Telegram updates.

    The update is handled before responding; serverless hosts may freeze
    the process once the response is sent. Always answers 200 so Telegram
    does not redeliver.
    """
    try:
        update_data = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return {"ok": True}

    await handle_telegram_update(update_data, ctx)

    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
