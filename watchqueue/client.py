"""Bot client and engine wiring."""

import asyncio
import logging

from pyrogram import Client
from pyrogram.enums import ParseMode
from pyrogram.errors import RPCError
from pyrogram.types import BotCommand, BotCommandScopeChat

from config import Config
from watchqueue.core.auth import Authorizer
from watchqueue.core.player import PlaybackDriver
from watchqueue.core.queue import QueueEngine
from watchqueue.helpers.localization import get_text, set_language
from watchqueue.helpers.youtube import LinkResolver

logger = logging.getLogger(__name__)

PLUGINS = ["start", "queue", "controls", "play"]

GROUP_COMMANDS = [
    BotCommand("help", "display this help"),
    BotCommand("queue", "show the current queue"),
    BotCommand("next", "skip the current video (maintainer only)"),
]

MAINTAINER_COMMANDS = [
    BotCommand("next", "skip the current video"),
    BotCommand("help", "display this help"),
]


class BotClient:
    """Main bot client manager."""

    def __init__(self, config: Config):
        """Initialize bot components."""
        self.config = config

        self.bot = Client(
            config.SESSION_NAME,
            api_id=config.api_id,
            api_hash=config.API_HASH,
            bot_token=config.BOT_TOKEN,
            workdir=config.WORKDIR,
            plugins=dict(root="watchqueue.plugins", include=PLUGINS),
            parse_mode=ParseMode.MARKDOWN,
        )

        # Core components
        self.auth = Authorizer(config.maintainer_id, config.control_group_id)
        self.resolver = LinkResolver(lookup=config.RESOLVE_METADATA)
        self.driver = PlaybackDriver(config.player_argv, stop_timeout=config.stop_timeout)
        self.engine = QueueEngine(self.driver, announce=self.announce)

        # Store in bot for plugin access
        self.bot.watchqueue = self

    async def start(self):
        """Start the client and the queue engine."""
        set_language(self.config.LANGUAGE)
        await self.bot.start()
        self.engine.start()

        me = await self.bot.get_me()
        logger.info(f"Bot started as @{me.username}")
        logger.info(f"Control group {self.auth.control_group_id}, maintainer {self.auth.maintainer_id}")

        await self.publish_commands()

    async def stop(self):
        """Stop the engine, the player and the client."""
        await self.engine.stop()
        await self.bot.stop()

    async def announce(self, key: str, **kwargs) -> None:
        """Send a status text to the control group."""
        try:
            await self.bot.send_message(
                self.auth.control_group_id,
                get_text(key, **kwargs),
                disable_web_page_preview=True,
            )
        except (RPCError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to send {key!r} to control group: {e}")

    async def publish_commands(self) -> None:
        """Register the command menus shown by Telegram clients."""
        try:
            await self.bot.set_bot_commands(
                GROUP_COMMANDS, scope=BotCommandScopeChat(self.auth.control_group_id)
            )
            await self.bot.set_bot_commands(
                MAINTAINER_COMMANDS, scope=BotCommandScopeChat(self.auth.maintainer_id)
            )
        except RPCError as e:
            logger.warning(f"Could not publish bot commands: {e}")
