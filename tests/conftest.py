"""
Shared pytest fixtures.

Engine tests run the real QueueEngine against FakePlaybackDriver; nothing
talks to Telegram or spawns mpv.
"""

from types import SimpleNamespace

import pytest

from watchqueue.core.auth import Authorizer
from watchqueue.core.queue import QueueEngine
from watchqueue.helpers.youtube import ResolvedLink

from tests.test_doubles import FakeAnnouncer, FakePlaybackDriver, FakeResolver

MAINTAINER_ID = 74897340
CONTROL_GROUP_ID = -866400246
MEMBER_ID = 5550001


@pytest.fixture
def fake_driver():
    return FakePlaybackDriver()


@pytest.fixture
def announcer():
    return FakeAnnouncer()


@pytest.fixture
async def engine(fake_driver, announcer):
    """A started engine; stopped again after the test."""
    engine = QueueEngine(fake_driver, announce=announcer)
    engine.start()
    yield engine
    await engine.stop()


@pytest.fixture
def auth():
    return Authorizer(maintainer_id=MAINTAINER_ID, control_group_id=CONTROL_GROUP_ID)


@pytest.fixture
def fake_resolver():
    return FakeResolver({
        "https://youtu.be/aaaaaaaaaaa": ResolvedLink("https://youtube.com/watch?v=aaaaaaaaaaa", "Video A", 61),
        "https://youtu.be/bbbbbbbbbbb": ResolvedLink("https://youtube.com/watch?v=bbbbbbbbbbb", "Video B", 0),
    })


@pytest.fixture
def bot(engine, auth, fake_resolver):
    """The object plugins reach through ``client.watchqueue``."""
    app = SimpleNamespace(engine=engine, auth=auth, resolver=fake_resolver)
    return SimpleNamespace(watchqueue=app)
