from .task import Task, Trigger, TriggerType, CronTrigger, FrequencyTrigger, Frequency, Engine, Autobot, resolve_delay_ms, tasks_from_bots
from .job import Job, JobStatus

__all__ = [
    "Task", "Trigger", "TriggerType", "CronTrigger", "FrequencyTrigger", "Frequency", "Engine", "Autobot",
    "resolve_delay_ms", "tasks_from_bots", "Job", "JobStatus",
]
