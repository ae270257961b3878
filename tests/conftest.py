import os

import pytest

from app.config import Mode, SessionConfig
from services.typing_engine import SessionController

# widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    def __init__(self, t: float = 1000.0):
        self.t = t

    def now(self) -> float:
        return self.t

    def advance(self, seconds: float):
        self.t += seconds


class FakeTicker:
    def __init__(self):
        self.active = False
        self.starts = 0
        self.stops = 0

    def start(self):
        self.active = True
        self.starts += 1

    def stop(self):
        self.active = False
        self.stops += 1


class RecordingRenderer:
    def __init__(self):
        self.snapshots = []

    def display(self, snapshot):
        self.snapshots.append(snapshot)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticker():
    return FakeTicker()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def reports():
    return []


@pytest.fixture
def make_session(clock, ticker, renderer, reports):
    def _make(words=("cat", "dog"), mode=Mode.TIME, duration=30, word_count=400):
        return SessionController(
            words=list(words),
            config=SessionConfig(mode=mode, duration=duration, word_count=word_count),
            clock=clock,
            ticker=ticker,
            renderer=renderer,
            on_finish=reports.append,
        )
    return _make
