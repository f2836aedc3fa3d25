from pyrogram import Client, filters
from pyrogram.types import Message

from watchqueue.helpers.filters import allowed_chat
from watchqueue.helpers.formatting import format_queue


@Client.on_message(filters.command("queue") & allowed_chat)
async def queue_command(client: Client, message: Message):
    snapshot = client.watchqueue.engine.list_pending()
    await message.reply_text(format_queue(snapshot), quote=True, disable_web_page_preview=True)
