"""
Core logic package.

Contains the queue engine, the player process driver and authorization.
"""

from .auth import Authorizer
from .player import Cause, Completion, PlaybackDriver, PlaybackProcess
from .queue import Advancing, Idle, Playing, QueueEngine, QueueItem, QueueSnapshot

__all__ = [
    "Authorizer",
    "Cause",
    "Completion",
    "PlaybackDriver",
    "PlaybackProcess",
    "Advancing",
    "Idle",
    "Playing",
    "QueueEngine",
    "QueueItem",
    "QueueSnapshot",
]
