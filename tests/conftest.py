"""Shared fixtures.

The engine under test uses in-memory storage, a frozen clock and a manual
scheduler so notification expiry and streak dates are deterministic.
"""

from datetime import datetime, timedelta

import pytest

from lingualearn.config.app_config import AppConfig
from lingualearn.core.catalog import generate_catalog
from lingualearn.core.engine import ProgressEngine
from lingualearn.core.notifications import NotificationQueue
from lingualearn.core.progress import ProgressStore
from lingualearn.core.storage import MemoryStorage


class ManualHandle:
    """Cancellable handle returned by ManualScheduler."""

    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose time only moves when a test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[ManualHandle] = []

    def schedule(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in list(self.handles):
            if not handle.cancelled and not handle.fired and handle.due <= self.now:
                handle.fired = True
                handle.callback()

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]


class FrozenClock:
    """Callable clock returning a fixed local datetime."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 3, 15, 10, 30))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return ProgressStore(storage)


@pytest.fixture
def queue(scheduler):
    return NotificationQueue(ttl_seconds=5.0, scheduler=scheduler)


@pytest.fixture
def engine(store, queue, clock):
    """Engine with Spanish and French only and default rules."""
    return ProgressEngine(
        store=store,
        notifications=queue,
        catalog=generate_catalog(["Spanish", "French"]),
        config=AppConfig(),
        clock=clock,
    )


@pytest.fixture
def learner(engine):
    """Engine with a registered user on the Spanish dashboard."""
    engine.register_user("ana", "secret", "ana@example.com")
    engine.select_language("Spanish")
    engine.notifications.clear()
    return engine


@pytest.fixture
def isolated_dir(tmp_path, monkeypatch):
    """Run from an empty directory so config and state files are fresh."""
    from lingualearn.config.app_config import clear_config_cache
    from lingualearn.config.languages import clear_languages_cache

    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    clear_languages_cache()
    yield tmp_path
    clear_config_cache()
    clear_languages_cache()


@pytest.fixture
def client(isolated_dir):
    """Web API test client backed by a fresh engine."""
    from fastapi.testclient import TestClient

    from lingualearn.web.api import create_app
    from lingualearn.web.sessions import reset_engine

    reset_engine()
    yield TestClient(create_app())
    reset_engine()
