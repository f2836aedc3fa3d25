import pytest

from config import Config
from watchqueue.errors import ConfigError

REQUIRED = {
    "API_ID": "12345",
    "API_HASH": "0123456789abcdef",
    "BOT_TOKEN": "123:abc",
    "MAINTAINER_ID": "74897340",
    "CONTROL_GROUP_ID": "-866400246",
}


@pytest.fixture
def env(monkeypatch):
    for name in ("PLAYER_COMMAND", "PLAYER_STOP_TIMEOUT", "PORT", "LOG_LEVEL", "RESOLVE_METADATA"):
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_valid_config(env):
    cfg = Config()
    cfg.validate()

    assert cfg.maintainer_id == 74897340
    assert cfg.control_group_id == -866400246
    assert cfg.api_id == 12345
    assert cfg.player_argv == ["mpv", "--fullscreen", "--really-quiet"]
    assert cfg.stop_timeout == 5.0
    assert cfg.port == 0
    assert cfg.RESOLVE_METADATA is True


@pytest.mark.parametrize("missing", sorted(REQUIRED))
def test_missing_required_value(env, missing):
    env.delenv(missing)
    with pytest.raises(ConfigError) as exc_info:
        Config().validate()
    assert missing in str(exc_info.value)


def test_non_numeric_identity(env):
    env.setenv("MAINTAINER_ID", "@someone")
    with pytest.raises(ConfigError):
        Config().validate()


def test_player_command_is_shell_split(env):
    env.setenv("PLAYER_COMMAND", "mpv --fs --ytdl-format='best[height<=1080]'")
    assert Config().player_argv == ["mpv", "--fs", "--ytdl-format=best[height<=1080]"]


def test_empty_player_command(env):
    env.setenv("PLAYER_COMMAND", "  ")
    with pytest.raises(ConfigError):
        Config().validate()


def test_bad_stop_timeout(env):
    env.setenv("PLAYER_STOP_TIMEOUT", "0")
    with pytest.raises(ConfigError):
        Config().validate()


def test_unknown_log_level(env):
    env.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ConfigError):
        Config().validate()


def test_metadata_lookup_can_be_disabled(env):
    env.setenv("RESOLVE_METADATA", "false")
    assert Config().RESOLVE_METADATA is False
