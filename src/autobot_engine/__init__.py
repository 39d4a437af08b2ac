"""
Autobot Engine

A small in-process scheduler for long-lived recurring tasks ("bots") and a
linear-backoff retrier for fallible async calls.

Core Concepts:

Task:
    A Task is a named unit of recurring work. It has exactly one trigger,
    either a cron expression or a frequency, and one async action.
    A frequency of "once" runs the action a single time.

Job:
    A Job records a single invocation of a Task's action: when it started,
    when it ended and whether it failed.

Scheduler:
    The Scheduler drives one independent asyncio loop per Task. An action that
    raises is logged and the loop carries on; a trigger that cannot be
    scheduled only stops its own loop. Frequency loops subtract the action's
    run time from the next wait so the period does not drift.

Relationships:
    - A Task can have multiple Job instances, each representing a single execution.
    - An Autobot groups several Tasks under one bot id.
"""

from .backends import InMemoryScheduler, LoopState, Scheduler
from .config import EngineSettings, get_settings
from .domain import Autobot, CronTrigger, Engine, Frequency, FrequencyTrigger, Job, JobStatus, Task, tasks_from_bots
from .exceptions import AutobotError, InvalidTriggerError, NoAttemptsError
from .logs import LogEntry, LoggingSink, LogSink, TaskLog, configure_logging
from .backoff import retry, retry_fetch, snooze

__all__ = [
    "Scheduler", "InMemoryScheduler", "LoopState",
    "EngineSettings", "get_settings",
    "Task", "CronTrigger", "FrequencyTrigger", "Frequency", "Engine", "Autobot", "tasks_from_bots", "Job", "JobStatus",
    "AutobotError", "InvalidTriggerError", "NoAttemptsError",
    "LogEntry", "LogSink", "LoggingSink", "TaskLog", "configure_logging",
    "retry", "retry_fetch", "snooze",
]
