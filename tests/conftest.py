"""
Shared fixtures for the test suite.

Sessions are built with a ``ManualTimer`` and a fake text source so no test
touches the real clipboard or spawns timer threads.
"""

from typing import List, Optional, Union

import pytest

from clipread.engine import ReaderEngine
from clipread.session import Notice, ReaderSession
from clipread.timers import ManualTimer
from clipread.web import create_app


class FakeSource:
    """Text source returning queued values; exceptions in the queue are raised."""

    def __init__(self, *values: Union[str, Exception]) -> None:
        self.values: List[Union[str, Exception]] = list(values)
        self.calls = 0

    def push(self, value: Union[str, Exception]) -> None:
        self.values.append(value)

    def __call__(self) -> str:
        self.calls += 1
        value = self.values.pop(0) if len(self.values) > 1 else (self.values[0] if self.values else "")
        if isinstance(value, Exception):
            raise value
        return value


class NoticeRecorder:
    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def __call__(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def last(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None


@pytest.fixture()
def engine() -> ReaderEngine:
    return ReaderEngine()


@pytest.fixture()
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture()
def make_source():
    """Factory for text sources with custom queued values."""
    return FakeSource


@pytest.fixture()
def source(make_source) -> FakeSource:
    return make_source("the quick brown fox jumps")


@pytest.fixture()
def notices() -> NoticeRecorder:
    return NoticeRecorder()


@pytest.fixture()
def session(engine, timer, source, notices):
    s = ReaderSession(engine, timer, source, show_notice=notices)
    yield s
    s.close()


@pytest.fixture()
def client(session):
    app = create_app(session)
    app.config["TESTING"] = True
    return app.test_client()
