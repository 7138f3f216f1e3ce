"""
Delayed Option monad
====================

DelayedOption - Option behind an explicit thunk:
- Lazy (nothing runs until run())
- Option[T] (short-circuit on Nothing)
"""

from .monad import DelayedOption, absent, bind, delay, lift, result, run
from .builder import DelayedOptionBuilder, delayed_maybe

__all__ = (
    "DelayedOption",
    "absent",
    "bind",
    "delay",
    "lift",
    "result",
    "run",
    "DelayedOptionBuilder",
    "delayed_maybe",
)
