"""
Option monad
============

Eager presence/absence on kungfu's Option (Some / Nothing).
"""

from .monad import absent, bind, is_present, result
from .builder import MaybeBuilder, maybe

__all__ = (
    "absent",
    "bind",
    "is_present",
    "result",
    "MaybeBuilder",
    "maybe",
)
