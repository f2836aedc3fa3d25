import os
import shlex
from typing import List

from dotenv import load_dotenv

from watchqueue.errors import ConfigError

load_dotenv()


def _as_int(name: str, value: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _as_float(name: str, value: str) -> float:
    try:
        return float(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}")


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Process configuration read from the environment (and .env)."""

    REQUIRED = ("API_ID", "API_HASH", "BOT_TOKEN", "MAINTAINER_ID", "CONTROL_GROUP_ID")

    def __init__(self):
        # Telegram API credentials
        self.API_ID = os.getenv("API_ID", "")
        self.API_HASH = os.getenv("API_HASH", "")
        self.BOT_TOKEN = os.getenv("BOT_TOKEN", "")
        self.SESSION_NAME = os.getenv("SESSION_NAME", "watchqueue")
        self.WORKDIR = os.getenv("WORKDIR", ".")

        # Identities
        self.MAINTAINER_ID = os.getenv("MAINTAINER_ID", "")
        self.CONTROL_GROUP_ID = os.getenv("CONTROL_GROUP_ID", "")

        # Player settings
        self.PLAYER_COMMAND = os.getenv("PLAYER_COMMAND", "mpv --fullscreen --really-quiet")
        self.PLAYER_STOP_TIMEOUT = os.getenv("PLAYER_STOP_TIMEOUT", "5")
        self.RESOLVE_METADATA = _as_bool(os.getenv("RESOLVE_METADATA", "true"))

        # Bot settings
        self.LANGUAGE = os.getenv("LANGUAGE", "en")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_FILE = os.getenv("LOG_FILE", "")
        self.PORT = os.getenv("PORT", "0")

    @property
    def player_argv(self) -> List[str]:
        return shlex.split(self.PLAYER_COMMAND)

    @property
    def api_id(self) -> int:
        return _as_int("API_ID", self.API_ID)

    @property
    def maintainer_id(self) -> int:
        return _as_int("MAINTAINER_ID", self.MAINTAINER_ID)

    @property
    def control_group_id(self) -> int:
        return _as_int("CONTROL_GROUP_ID", self.CONTROL_GROUP_ID)

    @property
    def stop_timeout(self) -> float:
        return _as_float("PLAYER_STOP_TIMEOUT", self.PLAYER_STOP_TIMEOUT)

    @property
    def port(self) -> int:
        return _as_int("PORT", self.PORT or "0")

    def validate(self) -> None:
        """Raise ConfigError unless every required setting is usable."""
        missing = [name for name in self.REQUIRED if not str(getattr(self, name)).strip()]
        if missing:
            raise ConfigError(f"ENV missing: {', '.join(missing)} required")

        for name in ("API_ID", "MAINTAINER_ID", "CONTROL_GROUP_ID"):
            _as_int(name, getattr(self, name))
        _as_int("PORT", self.PORT or "0")

        if not self.player_argv:
            raise ConfigError("PLAYER_COMMAND must not be empty")
        if self.stop_timeout <= 0:
            raise ConfigError("PLAYER_STOP_TIMEOUT must be positive")
        if self.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown LOG_LEVEL {self.LOG_LEVEL!r}")


config = Config()
