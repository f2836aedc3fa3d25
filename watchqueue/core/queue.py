"""Queue engine: pending items, the now-playing slot and playback transitions.

Every mutation goes through a single consumer task reading ``_events``.
Chat handlers and the player driver only post events, so enqueue, skip
and completion handling never interleave.
"""

import asyncio
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Deque, Optional, Tuple, Union

from watchqueue.errors import LaunchError

if TYPE_CHECKING:
    from watchqueue.core.player import Completion, PlaybackDriver, PlaybackProcess

logger = logging.getLogger(__name__)

_submission_counter = itertools.count(1)


@dataclass(frozen=True)
class QueueItem:
    """A resolved, playable submission."""
    handle: str
    title: str
    submitter_id: int
    submitter_name: str
    duration: int = 0
    index: int = field(default_factory=lambda: next(_submission_counter))

    @property
    def label(self) -> str:
        return self.title or self.handle


# Playback states

@dataclass(frozen=True)
class Idle:
    name = "idle"


@dataclass(frozen=True)
class Playing:
    item: QueueItem
    playback: "PlaybackProcess"
    name = "playing"


@dataclass(frozen=True)
class Advancing:
    # Process whose exit must be seen before the next dispatch
    awaiting: Optional["PlaybackProcess"] = None
    name = "advancing"


PlaybackState = Union[Idle, Playing, Advancing]


@dataclass(frozen=True)
class QueueSnapshot:
    """Read-only view returned by ``list_pending``."""
    current: Optional[QueueItem]
    pending: Tuple[QueueItem, ...]
    state: str

    @property
    def playing(self) -> bool:
        return self.current is not None


# Events consumed by the engine

@dataclass(frozen=True)
class Enqueue:
    item: QueueItem


@dataclass(frozen=True)
class RequestNext:
    pass


@dataclass(frozen=True)
class PlaybackFinished:
    completion: "Completion"


@dataclass(frozen=True)
class Shutdown:
    pass


Event = Union[Enqueue, RequestNext, PlaybackFinished, Shutdown]
Announcer = Callable[..., Awaitable[None]]


async def _silent(key: str, **kwargs) -> None:
    return None


class QueueEngine:
    """Serializes queue mutations and drives the playback driver."""

    def __init__(self, driver: "PlaybackDriver", announce: Optional[Announcer] = None):
        self.driver = driver
        self._announce = announce or _silent
        self._pending: Deque[QueueItem] = deque()
        self._state: PlaybackState = Idle()
        self._events: "asyncio.Queue[Event]" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None

        self.driver.on_complete(self.notify_finished)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Start the consumer task."""
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="queue-engine")
        logger.info("Queue engine started")

    async def stop(self) -> None:
        """Drain pending events, stop the consumer and the player."""
        if self.running:
            self._events.put_nowait(Shutdown())
            await self._worker
        self._worker = None
        await self.driver.close()
        logger.info("Queue engine stopped")

    async def join(self) -> None:
        """Wait until every posted event has been processed."""
        await self._events.join()

    # Operations

    def enqueue(self, item: QueueItem) -> None:
        logger.debug(f"Posting enqueue of {item.handle}")
        self._events.put_nowait(Enqueue(item))

    def request_next(self) -> None:
        logger.debug("Posting skip request")
        self._events.put_nowait(RequestNext())

    def notify_finished(self, completion: "Completion") -> None:
        self._events.put_nowait(PlaybackFinished(completion))

    def list_pending(self) -> QueueSnapshot:
        state = self._state
        current = state.item if isinstance(state, Playing) else None
        return QueueSnapshot(current=current, pending=tuple(self._pending), state=state.name)

    async def _notify(self, key: str, **kwargs) -> None:
        # Chat output is best-effort; state transitions never depend on it
        try:
            await self._announce(key, **kwargs)
        except Exception as e:
            logger.error(f"Failed to announce {key!r}: {e}")

    # Consumer

    async def _run(self) -> None:
        while True:
            event = await self._events.get()
            try:
                if isinstance(event, Shutdown):
                    break
                await self._dispatch(event)
            except Exception as e:
                logger.error(f"Error handling {type(event).__name__}: {e}", exc_info=True)
            finally:
                self._events.task_done()

    async def _dispatch(self, event: Event) -> None:
        if isinstance(event, Enqueue):
            await self._on_enqueue(event.item)
        elif isinstance(event, RequestNext):
            await self._on_request_next()
        elif isinstance(event, PlaybackFinished):
            await self._on_finished(event.completion)

    async def _on_enqueue(self, item: QueueItem) -> None:
        self._pending.append(item)
        logger.info(f"Queued #{item.index} {item.handle} from {item.submitter_name} ({len(self._pending)} pending)")
        if isinstance(self._state, Idle):
            await self._advance()

    async def _on_request_next(self) -> None:
        state = self._state
        if not isinstance(state, Playing):
            logger.debug(f"Skip ignored while {state.name}")
            return

        logger.info(f"Skipping {state.item.handle}")
        self._state = Advancing(awaiting=state.playback)
        if not self.driver.force_stop(state.playback):
            # Already exiting; its completion event is on the way
            logger.debug("Player already exiting, waiting for its completion")

    async def _on_finished(self, completion: "Completion") -> None:
        state = self._state
        playback = completion.playback
        if isinstance(state, Playing):
            expected = state.playback
        elif isinstance(state, Advancing):
            expected = state.awaiting
        else:
            expected = None

        if expected is None or expected is not playback:
            logger.debug(f"Ignoring stale completion for pid {playback.pid}")
            return

        if not completion.ok:
            logger.warning(f"Player exited with status {completion.status} for {playback.item.handle}")
            await self._notify("player_exit_error", title=playback.item.label, status=completion.status)

        await self._advance()

    async def _advance(self) -> None:
        self._state = Advancing()
        while self._pending:
            item = self._pending.popleft()
            try:
                playback = await self.driver.start(item)
            except LaunchError as e:
                logger.error(f"Launch failed for {item.handle}: {e}")
                await self._notify("launch_failed", title=item.label, error=str(e))
                continue

            self._state = Playing(item=item, playback=playback)
            logger.info(f"Now playing #{item.index} {item.handle}")
            await self._notify("now_playing", title=item.label, url=item.handle, requester=item.submitter_name)
            return

        self._state = Idle()
        logger.info("Queue empty, idle")
        await self._notify("queue_finished")
