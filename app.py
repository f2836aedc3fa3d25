"""Main application entry point."""

import asyncio
import logging
import sys
from typing import Optional

from aiohttp import web
from pyrogram import idle

from config import config
from watchqueue.errors import ConfigError

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    logging.getLogger("pyrogram").setLevel(logging.WARNING)


def create_health_app(engine) -> web.Application:
    """Health check application reporting the playback state."""

    async def health_check(request: web.Request) -> web.Response:
        snapshot = engine.list_pending()
        return web.json_response({
            "status": "ok" if engine.running else "stopped",
            "state": snapshot.state,
            "current": snapshot.current.handle if snapshot.current else None,
            "pending": len(snapshot.pending),
        })

    app = web.Application()
    app.router.add_get("/", health_check)
    app.router.add_get("/health", health_check)
    return app


async def start_bot() -> None:
    """Start the bot and keep it running until a shutdown signal."""
    # Import here so a bad config fails before pyrogram is touched
    from watchqueue.client import BotClient

    client = BotClient(config)
    runner: Optional[web.AppRunner] = None

    logger.info("Starting bot...")
    await client.start()

    try:
        if config.port:
            runner = web.AppRunner(create_health_app(client.engine))
            await runner.setup()
            site = web.TCPSite(runner, "0.0.0.0", config.port)
            await site.start()
            logger.info(f"Health check server running on port {config.port}")

        logger.info("Bot started successfully!")
        await idle()
    finally:
        logger.info("Shutting down...")
        if runner:
            await runner.cleanup()
        await client.stop()


def main() -> None:
    try:
        config.validate()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging()

    try:
        asyncio.run(start_bot())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
