"""Video link extraction and resolution."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yt_dlp
from yt_dlp.utils import DownloadError

from watchqueue.errors import ResolutionFailure

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)
YOUTUBE_ID_RE = re.compile(r"(?:youtu\.be/|/watch\?(?:.*&)?v=|/shorts/|/live/)([\w\-]{6,})")
YOUTUBE_HOST_RE = re.compile(r"^https?://(?:[\w\-]+\.)*(?:youtube\.com|youtu\.be|youtube-nocookie\.com)/", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedLink:
    """A playable handle with display metadata."""
    handle: str
    title: str
    duration: int = 0


def youtube_url(video_id: str) -> str:
    return f"https://youtube.com/watch?v={video_id}"


def find_links(text: Optional[str]) -> List[str]:
    """Return every http(s) URL in ``text``, in order, without duplicates."""
    if not text:
        return []
    links: List[str] = []
    for match in URL_RE.finditer(text):
        link = match.group(0).rstrip(").,;!?")
        if link not in links:
            links.append(link)
    return links


class LinkResolver:
    """Turns submitted links into playable handles.

    YouTube links are recognised by their video id. With ``lookup``
    enabled, yt-dlp is asked for the title, and links to any other site
    yt-dlp supports are accepted as well.
    """

    YDL_OPTIONS = {
        "quiet": True,
        "no_warnings": True,
        "noplaylist": True,
        "skip_download": True,
        "extract_flat": "in_playlist",
        "geo_bypass": True,
    }

    def __init__(self, lookup: bool = True):
        self.lookup = lookup

    @staticmethod
    def youtube_id(link: str) -> Optional[str]:
        if not YOUTUBE_HOST_RE.match(link):
            return None
        match = YOUTUBE_ID_RE.search(link)
        return match.group(1) if match else None

    async def resolve(self, link: str) -> ResolvedLink:
        """Resolve ``link`` or raise ResolutionFailure."""
        video_id = self.youtube_id(link)
        if not self.lookup:
            if video_id is None:
                raise ResolutionFailure(link, "not a YouTube video link")
            return ResolvedLink(handle=youtube_url(video_id), title="")

        info = await self.get_info(link)
        if not info:
            raise ResolutionFailure(link, "no playable video found")
        if info.get("_type") == "playlist" or info.get("entries") is not None:
            raise ResolutionFailure(link, "playlists are not supported")

        if video_id is not None:
            handle = youtube_url(info.get("id") or video_id)
        else:
            handle = info.get("webpage_url") or link
        return ResolvedLink(
            handle=handle,
            title=info.get("title") or "",
            duration=int(info.get("duration") or 0),
        )

    @classmethod
    async def get_info(cls, url: str) -> Optional[Dict[str, Any]]:
        """Get video info without downloading."""
        def _get_info():
            with yt_dlp.YoutubeDL(cls.YDL_OPTIONS) as ydl:
                try:
                    return ydl.extract_info(url, download=False, process=False)
                except DownloadError as e:
                    logger.warning(f"Info extraction failed for {url}: {e}")
            return None

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _get_info)
