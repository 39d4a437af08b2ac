import logging
from datetime import datetime, timezone

import pytest

from autobot_engine.config import EngineSettings
from autobot_engine.logs import LOGGER_NAME, LogEntry, LoggingSink, TaskLog, configure_logging


@pytest.fixture(autouse=True)
def restore_logger_level():
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    yield
    logger.setLevel(level)

@pytest.fixture(scope="function")
def timestamp() -> datetime:
    return datetime(2026, 10, 18, 15, 40, 1, 123000, tzinfo=timezone.utc)

def test_format_line(timestamp: datetime) -> None:
    entry = LogEntry(timestamp=timestamp, task_id="rates", label="minute", message="Run engine rates")
    assert entry.format_line() == "10-18T15:40:01.123Z:rates:minute: Run engine rates"

def test_format_line_with_error(timestamp: datetime) -> None:
    entry = LogEntry(timestamp=timestamp, task_id="rates", label="0 * * * *", message="failed", error=ValueError("boom"))
    assert entry.format_line() == "10-18T15:40:01.123Z:rates:0 * * * *: failed ValueError('boom')"

def test_logging_sink_writes_one_record_per_entry(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    sink = LoggingSink()

    sink.emit(LogEntry(task_id="rates", label="hour", message="hello"))
    sink.emit(LogEntry(task_id="rates", label="hour", message="failed", error=RuntimeError("down"), level=logging.ERROR))

    records = [r for r in caplog.records if r.name == LOGGER_NAME]
    assert len(records) == 2
    assert records[0].levelno == logging.INFO
    assert records[0].getMessage().endswith(":rates:hour: hello")
    assert records[1].levelno == logging.ERROR
    assert records[1].exc_info[1].args == ("down",)

def test_task_log_builds_entries(sink) -> None:
    log = TaskLog(sink, "rates", "2")

    log("fetched", 3, "rates")
    log.debug("details")
    log.warning("slow", "response")
    error = ValueError("bad")
    log.error("failed", error)

    assert [e.message for e in sink.entries] == ["fetched 3 rates", "details", "slow response", "failed"]
    assert [e.level for e in sink.entries] == [logging.INFO, logging.DEBUG, logging.WARNING, logging.ERROR]
    assert all(e.task_id == "rates" and e.label == "2" for e in sink.entries)
    assert sink.entries[-1].error is error

@pytest.mark.parametrize("verbosity, level", [
    ("debug", logging.DEBUG),
    ("info", logging.INFO),
    ("warn", logging.WARNING),
    ("error", logging.ERROR),
])
def test_configure_logging(verbosity: str, level: int) -> None:
    configure_logging(EngineSettings(log_level=verbosity))
    assert logging.getLogger(LOGGER_NAME).level == level
