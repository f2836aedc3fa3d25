"""
Helpers and utilities package.

Link resolution, text formatting, localization and pyrogram filters.
"""

from .localization import get_text, set_language
from .formatting import format_duration, format_queue
from .youtube import LinkResolver, ResolvedLink, find_links

__all__ = [
    "get_text",
    "set_language",
    "format_duration",
    "format_queue",
    "LinkResolver",
    "ResolvedLink",
    "find_links",
]
