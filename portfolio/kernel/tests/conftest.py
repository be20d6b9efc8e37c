"""
Portfolio kernel test configuration.

Shared fixtures: a controllable clock, in-memory and failing storages,
a store factory, and builders for raw record payloads.
"""

import pytest

from portfolio.kernel.storage import KeyValueStorage, MemoryStorage
from portfolio.kernel.store import ContentStateStore

START_MS = 1_700_000_000_000


class FakeClock:
    """Callable clock returning epoch ms; advance() moves it forward."""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FailingStorage(KeyValueStorage):
    """Storage whose operations raise, like a browser storage over quota."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True, fail_remove: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.fail_remove = fail_remove
        self.items: dict[str, str] = {}

    def get(self, key):
        if self.fail_get:
            raise OSError("storage unavailable")
        return self.items.get(key)

    def set(self, key, value):
        if self.fail_set:
            raise OSError("quota exceeded")
        self.items[key] = value

    def remove(self, key):
        if self.fail_remove:
            raise OSError("storage unavailable")
        self.items.pop(key, None)


class Recorder:
    """Listener that records every payload it receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)


def profile_data(**overrides):
    data = {
        "name": "Jordan Avery",
        "bio": "Solutions architect.",
        "profileImage": {
            "src": "images/profile.jpg",
            "alt": "Jordan Avery profile picture",
            "fallbackInitials": "JA",
        },
        "linkedinUrl": "https://www.linkedin.com/in/jordan-avery/",
    }
    data.update(overrides)
    return data


def achievement_data(n, **overrides):
    data = {
        "id": f"achievement-{n}",
        "title": f"Achievement {n}",
        "description": f"Description of achievement {n}.",
        "order": n,
    }
    data.update(overrides)
    return data


def content_data(n, type="blog", date=None, **overrides):
    data = {
        "id": f"content-{n}",
        "title": f"Content {n}",
        "type": type,
        "publicationDate": date if date is not None else f"2024-01-{n:02d}",
        "description": f"Description of content {n}.",
        "externalLink": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def durable():
    return MemoryStorage()


@pytest.fixture
def session():
    return MemoryStorage()


@pytest.fixture
def make_store(durable, session, clock):
    """Build a store over the shared fixtures; keyword args override."""

    def _make(**kwargs):
        kwargs.setdefault("durable", durable)
        kwargs.setdefault("session", session)
        kwargs.setdefault("clock", clock)
        return ContentStateStore(**kwargs)

    return _make


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_profile():
    return profile_data


@pytest.fixture
def make_achievement():
    return achievement_data


@pytest.fixture
def make_content():
    return content_data


@pytest.fixture
def make_failing_storage():
    return FailingStorage


@pytest.fixture
def make_recorder():
    return Recorder
