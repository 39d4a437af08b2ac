import uuid
from enum import Enum
from typing import Optional
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

class Job(BaseModel):
    """
    Represents a single invocation of a task's action.
    """
    id: str = Field(default_factory=lambda: f"job_{uuid.uuid4().hex[:8]}", description="Unique job identifier")
    task_id: str = Field(..., description="The task this invocation belongs to")
    status: JobStatus = JobStatus.PENDING
    error: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def duration_ms(self) -> Optional[float]:
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() * 1000

    def set_status(self, status: JobStatus):
        """
        Update the status of the job.
        """
        self.status = status
        if status == JobStatus.RUNNING:
            self.start_time = datetime.now(timezone.utc)
        elif status in [JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED]:
            self.end_time = datetime.now(timezone.utc)

    def set_error(self, error: BaseException):
        """
        Record the failure of the invocation.
        """
        self.error = repr(error)
        self.set_status(JobStatus.FAILED)
