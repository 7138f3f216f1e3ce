"""
Eventually monad
================

Step-resumable computations:
- Done(value) / NotYetDone(work) states
- step() as the only transition
- catch / try_with / try_finally / using threaded through suspension points
- drivers: steps, run_to_completion, interleave
"""

from .monad import (
    Done,
    Eventually,
    NotYetDone,
    bind,
    catch,
    combine,
    delay,
    for_loop,
    result,
    step,
    try_finally,
    try_with,
    using,
    while_loop,
)
from .drive import DrivePolicy, interleave, run_to_completion, steps
from .builder import EventuallyBuilder, eventually

__all__ = (
    # States
    "Done",
    "Eventually",
    "NotYetDone",
    # Operations
    "bind",
    "catch",
    "combine",
    "delay",
    "for_loop",
    "result",
    "step",
    "try_finally",
    "try_with",
    "using",
    "while_loop",
    # Drivers
    "DrivePolicy",
    "interleave",
    "run_to_completion",
    "steps",
    # Builder
    "EventuallyBuilder",
    "eventually",
)
