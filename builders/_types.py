"""
Core type definitions for builders.

Aliases and protocols shared by every monad in the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import LazyCoroResult, Result

# ============================================================================
# Type aliases
# ============================================================================

# Thunk = zero-argument callable, the unit of suspension
type Thunk[T] = Callable[[], T]

# Predicate = loop guard, re-evaluated before every iteration
type Predicate = Callable[[], bool]

# Compensation = cleanup action run by try_finally
type Compensation = Callable[[], None]

# OkOrException = an exception lifted into data by catch
# NOTE: Ok(value) when the step succeeded, Error(exc) when it raised.
type OkOrException[T] = Result[T, Exception]

# Task = lazy async computation whose failures are exceptions
type Task[T] = LazyCoroResult[T, Exception]

# ============================================================================
# Protocols
# ============================================================================


@typing.runtime_checkable
class Closeable(typing.Protocol):
    """Resource released with a single-shot close()."""

    def close(self) -> None: ...


@typing.runtime_checkable
class Disposable(typing.Protocol):
    """Resource released with a single-shot dispose()."""

    def dispose(self) -> None: ...


type Resource = Closeable | Disposable

__all__ = (
    # Type aliases
    "Thunk",
    "Predicate",
    "Compensation",
    "OkOrException",
    "Task",
    # Protocols
    "Closeable",
    "Disposable",
    "Resource",
)
