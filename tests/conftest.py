from typing import List

import pytest

from autobot_engine.config import get_settings
from autobot_engine.logs import LogEntry, LogSink


class RecordingSink(LogSink):
    def __init__(self):
        self.entries: List[LogEntry] = []

    def emit(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def messages(self, task_id: str) -> List[str]:
        return [e.message for e in self.entries if e.task_id == task_id]

    def errors(self, task_id: str) -> List[LogEntry]:
        return [e for e in self.entries if e.task_id == task_id and e.error is not None]


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()
