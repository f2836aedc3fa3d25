"""Player process driver."""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

from watchqueue.core.queue import QueueItem
from watchqueue.errors import LaunchError, PlayerBusy

logger = logging.getLogger(__name__)


class Cause(enum.Enum):
    """Why a player process ended."""
    NATURAL = "natural"
    FORCED = "forced"


@dataclass(eq=False)
class PlaybackProcess:
    """A live player process bound to one queue item."""
    item: QueueItem
    process: asyncio.subprocess.Process
    forced: bool = False
    watcher: Optional[asyncio.Task] = field(default=None, repr=False)

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def running(self) -> bool:
        return self.process.returncode is None


@dataclass(frozen=True)
class Completion:
    """Exit notification for a player process."""
    playback: PlaybackProcess
    cause: Cause
    status: Optional[int]

    @property
    def ok(self) -> bool:
        return self.cause is Cause.FORCED or self.status == 0


CompletionCallback = Callable[[Completion], None]


class PlaybackDriver:
    """Owns at most one external player process at a time."""

    def __init__(self, command: Sequence[str], stop_timeout: float = 5.0):
        self.command: List[str] = list(command)
        self.stop_timeout = stop_timeout
        self._current: Optional[PlaybackProcess] = None
        self._listeners: List[CompletionCallback] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def current(self) -> Optional[PlaybackProcess]:
        return self._current

    def on_complete(self, callback: CompletionCallback) -> None:
        """Register a callback fired once per finished process."""
        self._listeners.append(callback)

    async def start(self, item: QueueItem) -> PlaybackProcess:
        """Spawn the player for ``item``.

        Raises PlayerBusy if a process is still tracked and LaunchError if
        the player could not be spawned.
        """
        if self._current is not None:
            raise PlayerBusy(f"player already running (pid {self._current.pid})")

        argv = self.command + [item.handle]
        logger.debug(f"Spawning player: {argv}")
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Failed to spawn player for {item.handle}: {e}")
            raise LaunchError(item, str(e)) from e

        playback = PlaybackProcess(item=item, process=process)
        self._current = playback
        playback.watcher = asyncio.create_task(self._watch(playback))
        logger.info(f"Player started (pid {playback.pid}) for {item.handle}")
        return playback

    async def _watch(self, playback: PlaybackProcess) -> None:
        status = await playback.process.wait()
        if self._current is playback:
            self._current = None

        cause = Cause.FORCED if playback.forced else Cause.NATURAL
        logger.info(f"Player exited (pid {playback.pid}, {cause.value}, status {status})")

        completion = Completion(playback=playback, cause=cause, status=status)
        for callback in self._listeners:
            try:
                callback(completion)
            except Exception as e:
                logger.error(f"Completion callback failed: {e}")

    def force_stop(self, playback: Optional[PlaybackProcess] = None) -> bool:
        """Terminate the tracked process.

        Returns False without doing anything when there is nothing to stop.
        The exit is still reported through the watcher, tagged FORCED.
        """
        playback = playback or self._current
        if playback is None or playback is not self._current or not playback.running:
            return False

        playback.forced = True
        try:
            playback.process.terminate()
        except ProcessLookupError:
            # Exited on its own; the watcher reports it
            return False

        logger.info(f"Terminating player (pid {playback.pid})")
        task = asyncio.create_task(self._escalate(playback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _escalate(self, playback: PlaybackProcess) -> None:
        try:
            await asyncio.wait_for(playback.process.wait(), timeout=self.stop_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Player ignored SIGTERM, killing pid {playback.pid}")
            try:
                playback.process.kill()
            except ProcessLookupError:
                pass

    async def close(self) -> None:
        """Stop any running player and wait for its watcher."""
        playback = self._current
        if playback is None:
            return
        self.force_stop(playback)
        if playback.watcher:
            await playback.watcher
