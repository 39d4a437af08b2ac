from .base import BaseScheduler, LoopState
from .in_memory import InMemoryScheduler, Scheduler, compute_wait_ms

__all__ = ["BaseScheduler", "LoopState", "InMemoryScheduler", "Scheduler", "compute_wait_ms"]
