from abc import ABC, abstractmethod
from enum import Enum
from typing import Annotated, Awaitable, Callable, List, Literal, Optional, Union

from pydantic import BaseModel, Field, PositiveFloat, field_validator

from autobot_engine.logs import TaskLog


class TriggerType(str, Enum):
    CRON = "cron"
    FREQUENCY = "frequency"

class Frequency(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ONCE = "once"

# A month is a fixed 30 days, not a calendar month.
FREQUENCY_TO_MS = {
    Frequency.MINUTE: 60 * 1000,
    Frequency.HOUR: 60 * 60 * 1000,
    Frequency.DAY: 24 * 60 * 60 * 1000,
    Frequency.WEEK: 7 * 24 * 60 * 60 * 1000,
    Frequency.MONTH: 30 * 24 * 60 * 60 * 1000,
    Frequency.ONCE: 0,
}

def resolve_delay_ms(value: Union[Frequency, float]) -> float:
    """
    Resolve a named frequency or a number of seconds to a delay in milliseconds.
    """
    if isinstance(value, Frequency):
        return FREQUENCY_TO_MS[value]
    return value * 1000

Action = Callable[[TaskLog], Awaitable[None]]

class BaseTrigger(BaseModel, ABC):
    """
    Base class for all trigger types.
    """
    type: TriggerType

    @property
    @abstractmethod
    def label(self) -> str:
        pass

    @abstractmethod
    def format_schedule(self) -> str:
        pass

class CronTrigger(BaseTrigger):
    """
    Fires at every time matching a cron expression.

    Five fields (minute, hour, day-of-month, month, day-of-week), or six with a
    leading seconds field.
    """
    type: Literal["cron"] = "cron"
    expression: str = Field(..., description="Cron expression defining the recurring execution pattern")

    @field_validator("expression")
    def strip_expression(cls, v: str) -> str:
        return " ".join(v.split())

    @property
    def label(self) -> str:
        return self.expression

    def format_schedule(self) -> str:
        return f"Scheduled to recur with cron expression: {self.expression}"

class FrequencyTrigger(BaseTrigger):
    """
    Runs the action, then waits out the rest of a fixed interval before running it again.
    """
    type: Literal["frequency"] = "frequency"
    value: Union[Frequency, PositiveFloat] = Field(..., description="Named frequency or interval in seconds")

    @property
    def is_once(self) -> bool:
        return self.value == Frequency.ONCE

    @property
    def delay_ms(self) -> float:
        return resolve_delay_ms(self.value)

    @property
    def label(self) -> str:
        if isinstance(self.value, Frequency):
            return self.value.value
        return f"{self.value:g}"

    def format_schedule(self) -> str:
        if self.is_once:
            return "Scheduled for one-time execution"
        return f"Scheduled to run every {self.label}" + ("" if isinstance(self.value, Frequency) else "s")

Trigger = Annotated[Union[CronTrigger, FrequencyTrigger], Field(discriminator="type")]

class Task(BaseModel):
    """
    A named unit of recurring work: one trigger and one action.
    """
    task_id: str = Field(..., min_length=1, description="Unique task identifier, used for logs and job history")
    description: Optional[str] = Field(None, description="Free-form description of what the task does")
    trigger: Trigger = Field(..., description="When the action runs")
    action: Action = Field(..., description="Async callable receiving a TaskLog", exclude=True)

    @property
    def is_cron(self) -> bool:
        return self.trigger.type == TriggerType.CRON

    @property
    def label(self) -> str:
        return self.trigger.label

    @property
    def readable_string(self) -> str:
        task_summary = f"Task: '{self.task_id}'"
        if self.description:
            task_summary += f"\nDescription: {self.description}"
        return f"{task_summary}\n{self.trigger.format_schedule()}"

class Engine(BaseModel):
    """
    One trigger/action pair belonging to an Autobot.
    """
    trigger: Trigger
    action: Action = Field(..., exclude=True)

class Autobot(BaseModel):
    """
    A bot groups one or more engines under a shared id.
    """
    bot_id: str = Field(..., min_length=1)
    engines: Optional[List[Engine]] = None

    def to_tasks(self) -> List[Task]:
        if not self.engines:
            return []
        if len(self.engines) == 1:
            engine = self.engines[0]
            return [Task(task_id=self.bot_id, trigger=engine.trigger, action=engine.action)]
        return [
            Task(task_id=f"{self.bot_id}:{index}", trigger=engine.trigger, action=engine.action)
            for index, engine in enumerate(self.engines)
        ]

def tasks_from_bots(bots: List[Autobot]) -> List[Task]:
    return [task for bot in bots for task in bot.to_tasks()]
