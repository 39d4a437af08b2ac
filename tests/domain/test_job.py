from datetime import timedelta

from autobot_engine.domain.job import Job, JobStatus


def test_new_job_is_pending() -> None:
    job = Job(task_id="rates")
    assert job.status == JobStatus.PENDING
    assert job.id.startswith("job_")
    assert job.duration_ms is None

def test_job_lifecycle() -> None:
    job = Job(task_id="rates")
    job.set_status(JobStatus.RUNNING)
    assert job.start_time is not None
    assert job.end_time is None

    job.set_status(JobStatus.COMPLETED)
    assert job.end_time is not None
    assert job.duration_ms >= 0

def test_set_error() -> None:
    job = Job(task_id="rates")
    job.set_status(JobStatus.RUNNING)
    job.set_error(ValueError("boom"))
    assert job.status == JobStatus.FAILED
    assert job.error == "ValueError('boom')"
    assert job.end_time is not None

def test_duration_ms() -> None:
    job = Job(task_id="rates")
    job.set_status(JobStatus.RUNNING)
    job.end_time = job.start_time + timedelta(milliseconds=250)
    assert job.duration_ms == 250
