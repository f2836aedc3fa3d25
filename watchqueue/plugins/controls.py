"""Playback control commands."""

import logging

from pyrogram import Client, filters
from pyrogram.types import Message

from watchqueue.helpers.filters import allowed_chat
from watchqueue.helpers.localization import get_text

logger = logging.getLogger(__name__)


@Client.on_message(filters.command("next") & allowed_chat)
async def next_command(client: Client, message: Message):
    """Handle /next."""
    app = client.watchqueue
    user = message.from_user

    # Maintainer only
    if not app.auth.is_maintainer(user.id if user else None):
        logger.info(f"Denied /next from {user.id if user else 'unknown'}")
        await message.reply_text(get_text("maintainer_only"), quote=True)
        return

    if not app.engine.list_pending().playing:
        await message.reply_text(get_text("nothing_playing"), quote=True)
        return

    app.engine.request_next()
    await message.reply_text(get_text("skipping"), quote=True)
