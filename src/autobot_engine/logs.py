import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from autobot_engine.config import EngineSettings

LOGGER_NAME = "autobot_engine"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class LogEntry(BaseModel):
    """
    A single structured log record produced by a task loop or a task action.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: str = Field(..., description="Task that produced the entry")
    label: str = Field(..., description="Trigger label: cron expression, frequency name or seconds")
    message: str
    error: Optional[BaseException] = None
    level: int = logging.INFO

    def format_line(self) -> str:
        # ISO timestamp without the year, e.g. 10-18T15:40:01.123Z
        stamp = self.timestamp.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        stamp = stamp.replace("+00:00", "Z")[5:]
        line = f"{stamp}:{self.task_id}:{self.label}: {self.message}"
        if self.error is not None:
            line += f" {self.error!r}"
        return line


class LogSink(Protocol):
    """
    Protocol for the logging capability consumed by the scheduler.
    """

    def emit(self, entry: LogEntry) -> None:
        """
        Write one entry. Called synchronously and never awaited.
        """
        ...


class LoggingSink(LogSink):
    """
    Sink writing each entry as a single record on a standard library logger.
    """

    def __init__(self, logger_name: str = LOGGER_NAME):
        self.logger = logging.getLogger(logger_name)

    def emit(self, entry: LogEntry) -> None:
        exc_info = None
        if entry.error is not None:
            exc_info = (type(entry.error), entry.error, entry.error.__traceback__)
        self.logger.log(entry.level, entry.format_line(), exc_info=exc_info)


class TaskLog:
    """
    Logging capability handed to a task's action, bound to one task.

    Calling it like a function joins the values with spaces:

        log("fetched", 3, "rates")
    """

    def __init__(self, sink: LogSink, task_id: str, label: str):
        self.sink = sink
        self.task_id = task_id
        self.label = label

    def _emit(self, level: int, message: str, error: Optional[BaseException] = None) -> None:
        self.sink.emit(LogEntry(task_id=self.task_id, label=self.label, message=message, error=error, level=level))

    def __call__(self, *values: Any) -> None:
        self._emit(logging.INFO, " ".join(str(v) for v in values))

    def debug(self, *values: Any) -> None:
        self._emit(logging.DEBUG, " ".join(str(v) for v in values))

    def warning(self, *values: Any) -> None:
        self._emit(logging.WARNING, " ".join(str(v) for v in values))

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        self._emit(logging.ERROR, message, error)


def configure_logging(settings: EngineSettings) -> None:
    logging.basicConfig(
        level=_LEVELS[settings.log_level],
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger(LOGGER_NAME).setLevel(_LEVELS[settings.log_level])
