"""
Task monad
==========

Async tasks on kungfu's LazyCoroResult with exceptions as the error type.
"""

from .builder import TaskBuilder, task
from .time import cached, delayed, run_synchronously, sleep

__all__ = (
    "TaskBuilder",
    "task",
    "cached",
    "delayed",
    "run_synchronously",
    "sleep",
)
