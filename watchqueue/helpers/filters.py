"""Pyrogram filters backed by the configured identities."""

from pyrogram import filters


def _control_group(flt, client, message) -> bool:
    chat = message.chat
    return client.watchqueue.auth.is_from_control_group(chat.id if chat else None)


def _maintainer(flt, client, message) -> bool:
    user = message.from_user
    return client.watchqueue.auth.is_maintainer(user.id if user else None)


control_group = filters.create(_control_group, "ControlGroupFilter")
maintainer = filters.create(_maintainer, "MaintainerFilter")

# Where commands are accepted: the control group, or a private chat with the maintainer
allowed_chat = control_group | (filters.private & maintainer)
