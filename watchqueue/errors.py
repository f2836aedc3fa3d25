"""Exceptions raised across the bot."""


class WatchQueueError(Exception):
    """Base class for all bot errors."""


class ConfigError(WatchQueueError):
    """Startup configuration is missing or invalid."""


class ResolutionFailure(WatchQueueError):
    """Submitted text is not a playable video link."""

    def __init__(self, link: str, reason: str):
        super().__init__(f"{link}: {reason}")
        self.link = link
        self.reason = reason


class LaunchError(WatchQueueError):
    """The player process could not be started."""

    def __init__(self, item, reason: str):
        super().__init__(f"could not start player for {item.handle}: {reason}")
        self.item = item
        self.reason = reason


class PlayerBusy(WatchQueueError):
    """A player process is already tracked by the driver."""
