"""Help command and private chat handling."""

import logging

from pyrogram import Client, filters
from pyrogram.types import Message

from watchqueue.helpers.filters import allowed_chat, maintainer
from watchqueue.helpers.localization import get_text

logger = logging.getLogger(__name__)


@Client.on_message(filters.command(["help", "start"]) & allowed_chat)
async def help_command(client: Client, message: Message):
    """Handle /help and /start."""
    await message.reply_text(get_text("help"))


@Client.on_message(filters.private & ~maintainer)
async def refuse_private(client: Client, message: Message):
    """Anyone but the maintainer is turned away in private chats."""
    user = message.from_user
    logger.info(f"Refused private message from {user.id if user else 'unknown'}")
    await message.reply_text(get_text("private_refused"), quote=True)
