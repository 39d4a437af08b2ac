class AutobotError(Exception):
    """
    Base class for all errors raised by the engine.
    """


class InvalidTriggerError(AutobotError, ValueError):
    """
    Raised when a task's trigger cannot be scheduled, e.g. a malformed cron expression.
    """

    def __init__(self, task_id: str, expression: str, reason: str):
        self.task_id = task_id
        self.expression = expression
        super().__init__(f"Invalid cron expression '{expression}' for task {task_id}: {reason}")


class NoAttemptsError(AutobotError, ValueError):
    """
    Raised when an operation is retried with max_attempts <= 0.
    """

    def __init__(self, max_attempts: int):
        self.max_attempts = max_attempts
        super().__init__(f"No attempts allowed (max_attempts={max_attempts})")
