from abc import ABC, abstractmethod
import asyncio
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional

from autobot_engine.config import EngineSettings, get_settings
from autobot_engine.domain.job import Job, JobStatus
from autobot_engine.domain.task import Task
from autobot_engine.logs import LoggingSink, LogSink, TaskLog


class LoopState(str, Enum):
    SCHEDULED = "scheduled"
    WAITING = "waiting"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    STOPPED = "stopped"

class BaseScheduler(ABC):
    def __init__(self, settings: Optional[EngineSettings] = None, sink: Optional[LogSink] = None):
        self.settings: EngineSettings = settings or get_settings()
        self.sink: LogSink = sink or LoggingSink()
        self.jobs: Dict[str, Deque[Job]] = {}
        self.states: Dict[str, LoopState] = {}

    def validate_tasks(self, tasks: List[Task]) -> None:
        seen = set()
        for task in tasks:
            if task.task_id in seen:
                raise ValueError(f"Duplicate task id '{task.task_id}'")
            seen.add(task.task_id)

    @abstractmethod
    async def start(self, tasks: List[Task]) -> None:
        pass

    @abstractmethod
    async def stop(self) -> None:
        pass

    def state_of(self, task_id: str) -> Optional[LoopState]:
        return self.states.get(task_id)

    def _set_state(self, task_id: str, state: LoopState) -> None:
        self.states[task_id] = state

    def task_log(self, task: Task) -> TaskLog:
        return TaskLog(self.sink, task.task_id, task.label)

    def list_jobs(self, task_id: str, limit: int = 10) -> List[Job]:
        if limit <= 0:
            return []
        return list(self.jobs.get(task_id, ()))[-limit:]

    def get_recent_job(self, task_id: str) -> Optional[Job]:
        task_jobs = self.jobs.get(task_id)
        return task_jobs[-1] if task_jobs else None

    def _create_job(self, task: Task) -> Job:
        job = Job(task_id=task.task_id)
        if task.task_id not in self.jobs:
            self.jobs[task.task_id] = deque(maxlen=self.settings.job_history_limit)
        self.jobs[task.task_id].append(job)
        return job

    async def _execute_task(self, task: Task, log: TaskLog) -> Job:
        """
        Run the task's action once. Errors are logged and recorded on the job, never raised.
        """
        job = self._create_job(task)
        job.set_status(JobStatus.RUNNING)
        self._set_state(task.task_id, LoopState.RUNNING)

        try:
            await task.action(log)
            job.set_status(JobStatus.COMPLETED)
        except asyncio.CancelledError:
            job.set_status(JobStatus.CANCELLED)
            raise
        except Exception as e:
            job.set_error(e)
            log.error(f"Engine '{task.label}' failed to run for {task.task_id}", e)
        return job
