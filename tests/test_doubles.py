"""
Test doubles for the queue engine and chat handlers.

The fake driver never spawns processes: tests decide when a playback ends
by calling ``finish``. Forced stops complete immediately.
"""

import itertools
from types import SimpleNamespace
from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

from watchqueue.core.player import Cause, Completion
from watchqueue.core.queue import QueueItem
from watchqueue.errors import LaunchError, PlayerBusy, ResolutionFailure
from watchqueue.helpers.youtube import ResolvedLink

_pids = itertools.count(1000)


class FakePlayback:
    """Stands in for PlaybackProcess."""

    def __init__(self, item: QueueItem):
        self.item = item
        self.pid = next(_pids)
        self.forced = False
        self.running = True

    def __repr__(self):
        return f"FakePlayback({self.item.handle!r}, pid={self.pid})"


class FakePlaybackDriver:
    """Driver double tracking how many players are alive."""

    def __init__(self, failing: Tuple[str, ...] = ()):
        self.failing = set(failing)
        self.started: List[QueueItem] = []
        self.stopped: List[FakePlayback] = []
        self.busy_errors = 0
        self.live = 0
        self.max_live = 0
        self.closed = False
        self._current: Optional[FakePlayback] = None
        self._listeners = []

    @property
    def current(self) -> Optional[FakePlayback]:
        return self._current

    def on_complete(self, callback) -> None:
        self._listeners.append(callback)

    async def start(self, item: QueueItem) -> FakePlayback:
        if self._current is not None:
            self.busy_errors += 1
            raise PlayerBusy("player already running")
        if item.handle in self.failing:
            raise LaunchError(item, "player binary missing")

        playback = FakePlayback(item)
        self._current = playback
        self.started.append(item)
        self.live += 1
        self.max_live = max(self.max_live, self.live)
        return playback

    def finish(self, playback: Optional[FakePlayback] = None, status: int = 0) -> Completion:
        """End a playback as if the player exited on its own."""
        playback = playback or self._current
        assert playback is not None, "nothing is playing"
        return self._complete(playback, status)

    def force_stop(self, playback: Optional[FakePlayback] = None) -> bool:
        playback = playback or self._current
        if playback is None or playback is not self._current or not playback.running:
            return False
        playback.forced = True
        self.stopped.append(playback)
        self._complete(playback, -15)
        return True

    def _complete(self, playback: FakePlayback, status: int) -> Completion:
        playback.running = False
        if self._current is playback:
            self._current = None
            self.live -= 1
        cause = Cause.FORCED if playback.forced else Cause.NATURAL
        completion = Completion(playback=playback, cause=cause, status=status)
        for callback in self._listeners:
            callback(completion)
        return completion

    async def close(self) -> None:
        self.closed = True
        self.force_stop()


class FakeAnnouncer:
    """Records announcements instead of sending them."""

    def __init__(self):
        self.sent: List[Tuple[str, Dict]] = []

    async def __call__(self, key: str, **kwargs) -> None:
        self.sent.append((key, kwargs))

    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self.sent]


class FakeResolver:
    """Resolves known links from a table, rejects everything else."""

    def __init__(self, table: Optional[Dict[str, ResolvedLink]] = None):
        self.table = table or {}
        self.calls: List[str] = []

    async def resolve(self, link: str) -> ResolvedLink:
        self.calls.append(link)
        if link not in self.table:
            raise ResolutionFailure(link, "no playable video found")
        return self.table[link]


def create_item(handle: str, submitter: str = "alice", submitter_id: int = 1, title: str = "") -> QueueItem:
    return QueueItem(handle=handle, title=title, submitter_id=submitter_id, submitter_name=submitter)


def create_message(text: Optional[str], user_id: Optional[int] = 1, chat_id: int = -100, first_name: str = "alice"):
    """A pyrogram Message stand-in with an awaitable reply_text."""
    user = SimpleNamespace(id=user_id, first_name=first_name, username=None) if user_id is not None else None
    return SimpleNamespace(
        text=text,
        caption=None,
        entities=None,
        caption_entities=None,
        from_user=user,
        sender_chat=None,
        chat=SimpleNamespace(id=chat_id),
        reply_text=AsyncMock(),
    )


def replies(message) -> List[str]:
    return [call.args[0] for call in message.reply_text.await_args_list]


class FailingAnnouncer(FakeAnnouncer):
    """Records announcements, then raises for the configured keys."""

    def __init__(self, failing_keys=None, error=ConnectionError("network is unreachable")):
        super().__init__()
        self.failing_keys = failing_keys
        self.error = error

    async def __call__(self, key: str, **kwargs) -> None:
        await super().__call__(key, **kwargs)
        if self.failing_keys is None or key in self.failing_keys:
            raise self.error
