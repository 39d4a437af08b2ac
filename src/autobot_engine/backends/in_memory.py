import asyncio
import time
from datetime import datetime, tzinfo
from typing import Callable, Dict, List, Optional
from zoneinfo import ZoneInfo

import tzlocal
from croniter import croniter

from autobot_engine.config import EngineSettings
from autobot_engine.domain.task import CronTrigger, FrequencyTrigger, Task
from autobot_engine.exceptions import InvalidTriggerError
from autobot_engine.logs import LogSink, TaskLog
from autobot_engine.backoff import snooze
from .base import BaseScheduler, LoopState


def compute_wait_ms(delay_ms: float, elapsed_ms: float) -> float:
    """
    Time left in the interval once the action has run, so runs start every delay_ms.
    """
    return max(0, delay_ms - elapsed_ms)

class InMemoryScheduler(BaseScheduler):
    """
    Runs every task in its own asyncio loop inside the current process.

    Nothing is persisted: schedule state lives in memory and is lost on restart.
    Loops are independent, so a slow or failing action only affects its own task.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        sink: Optional[LogSink] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(settings, sink)
        self.clock = clock
        self.loops: Dict[str, asyncio.Task] = {}
        self.started: bool = False
        self.stopped: bool = False
        if self.settings.timezone:
            self.tz: tzinfo = ZoneInfo(self.settings.timezone)
        else:
            self.tz = tzlocal.get_localzone()

    @property
    def is_running(self) -> bool:
        return self.started and not self.stopped

    async def start(self, tasks: List[Task]) -> None:
        """
        Spawn one loop per task and return without waiting for any of them.
        """
        if self.started:
            raise RuntimeError("Scheduler already started")
        self.validate_tasks(tasks)
        self.started = True
        for task in tasks:
            self.loops[task.task_id] = asyncio.create_task(self._run_loop(task), name=f"autobot:{task.task_id}")

    async def stop(self) -> None:
        """
        Cancel every loop, including any action currently running, and wait for them to finish.
        """
        if not self.is_running:
            return
        self.stopped = True
        for task_id, loop in self.loops.items():
            if not loop.done():
                loop.cancel()
                self._set_state(task_id, LoopState.STOPPED)
        await asyncio.gather(*self.loops.values(), return_exceptions=True)

    async def wait(self) -> None:
        """
        Wait until every loop has ended.
        """
        await asyncio.gather(*self.loops.values(), return_exceptions=True)

    async def _run_loop(self, task: Task) -> None:
        log = self.task_log(task)
        try:
            if isinstance(task.trigger, CronTrigger):
                await self._cron_loop(task, task.trigger, log)
            else:
                await self._frequency_loop(task, task.trigger, log)
        except asyncio.CancelledError:
            self._set_state(task.task_id, LoopState.STOPPED)
            raise
        except InvalidTriggerError as e:
            self._set_state(task.task_id, LoopState.FAILED)
            log.error(f"{task.task_id}: Engine failed to initialize schedule", e)
        except Exception as e:
            self._set_state(task.task_id, LoopState.FAILED)
            log.error(f"{task.task_id}: Engine loop stopped unexpectedly", e)

    def _parse_cron(self, task: Task, trigger: CronTrigger, base: datetime) -> croniter:
        fields = trigger.expression.split()
        if len(fields) not in (5, 6):
            raise InvalidTriggerError(task.task_id, trigger.expression, f"expected 5 or 6 fields, got {len(fields)}")
        try:
            return croniter(trigger.expression, base, second_at_beginning=True)
        except (ValueError, KeyError) as e:
            raise InvalidTriggerError(task.task_id, trigger.expression, str(e)) from e

    async def _cron_loop(self, task: Task, trigger: CronTrigger, log: TaskLog) -> None:
        # Validate before the first wait so a bad expression fails right away
        self._parse_cron(task, trigger, datetime.now(self.tz))
        last_fire: Optional[datetime] = None
        while True:
            now = datetime.now(self.tz)
            # Never fire the same slot twice, even if the sleep woke up early
            base = last_fire if last_fire is not None and last_fire > now else now
            next_fire = self._parse_cron(task, trigger, base).get_next(datetime)
            self._set_state(task.task_id, LoopState.SCHEDULED)
            await snooze((next_fire - datetime.now(self.tz)).total_seconds() * 1000)
            last_fire = next_fire
            await self._execute_task(task, log)

    async def _frequency_loop(self, task: Task, trigger: FrequencyTrigger, log: TaskLog) -> None:
        delay_ms = trigger.delay_ms
        while True:
            start_time = self.clock()
            log.debug(f"Run engine {task.task_id}")
            await self._execute_task(task, log)
            elapsed_ms = (self.clock() - start_time) * 1000
            wait_ms = compute_wait_ms(delay_ms, elapsed_ms)
            if trigger.is_once:
                self._set_state(task.task_id, LoopState.DONE)
                break
            log.debug(f"Engine '{trigger.label}' for {task.task_id} waiting {wait_ms:.0f}ms")
            self._set_state(task.task_id, LoopState.WAITING)
            await snooze(wait_ms)


Scheduler = InMemoryScheduler
