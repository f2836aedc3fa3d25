"""Link submissions."""

import logging
from typing import List

from pyrogram import Client, filters
from pyrogram.enums import MessageEntityType
from pyrogram.types import Message

from watchqueue.core.queue import QueueItem
from watchqueue.errors import ResolutionFailure
from watchqueue.helpers.filters import control_group
from watchqueue.helpers.localization import get_text
from watchqueue.helpers.youtube import find_links

logger = logging.getLogger(__name__)


def collect_links(message: Message) -> List[str]:
    """Links in the message text or caption, including hidden text links."""
    links = find_links(message.text or message.caption)
    for entity in message.entities or message.caption_entities or []:
        if entity.type == MessageEntityType.TEXT_LINK and entity.url and entity.url not in links:
            links.append(entity.url)
    return links


def submitter_of(message: Message):
    user = message.from_user
    if user:
        return user.id, user.first_name or user.username or str(user.id)
    if message.sender_chat:
        return message.sender_chat.id, message.sender_chat.title or "anonymous"
    return 0, "anonymous"


@Client.on_message(control_group & (filters.text | filters.caption) & ~filters.regex(r"^/"))
async def submit_links(client: Client, message: Message):
    """Resolve every link in a group message and queue the playable ones."""
    links = collect_links(message)
    if not links:
        return

    app = client.watchqueue
    submitter_id, submitter_name = submitter_of(message)

    added = 0
    for link in links:
        try:
            resolved = await app.resolver.resolve(link)
        except ResolutionFailure as e:
            logger.info(f"Rejected {link} from {submitter_name}: {e.reason}")
            await message.reply_text(
                get_text("resolution_failed", link=e.link, reason=e.reason),
                quote=True,
                disable_web_page_preview=True,
            )
            continue

        logger.info(f"Found {resolved.handle}, adding to queue")
        app.engine.enqueue(QueueItem(
            handle=resolved.handle,
            title=resolved.title,
            submitter_id=submitter_id,
            submitter_name=submitter_name,
            duration=resolved.duration,
        ))
        added += 1

    if added:
        await message.reply_text(
            get_text("added_to_queue", count=added, plural="" if added == 1 else "s"),
            quote=True,
        )
