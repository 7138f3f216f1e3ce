"""
Eventually Monad
================

A computation represented as an explicit resumable state machine:

- Done(value)      - terminal, holds the result
- NotYetDone(work) - work() produces the next state

The only transition is step(): Done steps to itself, NotYetDone(work) calls
work() exactly once. Nothing drains a computation automatically; the caller
(see builders.resumable.drive) decides how many steps to take and when.

Exceptions and cleanup cross suspension points as data: catch() lifts the
outcome of every step into OkOrException (kungfu Result), and
try_with/try_finally/using are built from catch + bind rather than from
native try blocks spanning several steps.

Bind chains are trampolined. Binding onto a computation that is already a
bind chain appends to its continuation list instead of wrapping it, and one
step applies the continuations in a loop. The Python stack does not grow with
the number of binds, however they are nested.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from kungfu import Error, Ok

from .._helpers import close_iterator, dispose
from .._types import Compensation, OkOrException, Predicate

# ============================================================================
# States
# ============================================================================


@dataclass(frozen=True, slots=True)
class Done[T]:
    """Terminal state."""

    value: T

    @property
    def is_done(self) -> bool:
        return True

    def step(self) -> Done[T]:
        return self

    def then[U](self, func: Callable[[T], Eventually[U]], /) -> Eventually[U]:
        return bind(self, func)


@dataclass(frozen=True, slots=True)
class NotYetDone[T]:
    """Suspended state; work() advances the computation by one step."""

    work: Callable[[], Eventually[T]]

    @property
    def is_done(self) -> bool:
        return False

    def step(self) -> Eventually[T]:
        return self.work()

    def then[U](self, func: Callable[[T], Eventually[U]], /) -> Eventually[U]:
        return bind(self, func)


type Eventually[T] = Done[T] | NotYetDone[T]


# ============================================================================
# Continuations
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Chain:
    """
    Work of a bound computation: step `source` once, then feed the value
    through `funcs` while results keep coming back Done.

    `source` is never itself backed by a _Chain.
    """

    source: NotYetDone[typing.Any]
    funcs: tuple[Callable[[typing.Any], Eventually[typing.Any]], ...]

    def __call__(self) -> Eventually[typing.Any]:
        state = self.source.work()
        for index, func in enumerate(self.funcs):
            match state:
                case Done(value):
                    state = func(value)
                case NotYetDone():
                    return _suspend(state, self.funcs[index:])
        return state


@dataclass(frozen=True, slots=True)
class _Catching:
    """Work of catch(inner): one guarded step of `inner`."""

    inner: NotYetDone[typing.Any]

    def __call__(self) -> Eventually[OkOrException[typing.Any]]:
        try:
            state = self.inner.work()
        except Exception as exc:
            return Done(Error(exc))
        return catch(state)


def _suspend(
    state: NotYetDone[typing.Any],
    funcs: tuple[Callable[[typing.Any], Eventually[typing.Any]], ...],
) -> NotYetDone[typing.Any]:
    match state.work:
        case _Chain(source=source, funcs=pending):
            return NotYetDone(_Chain(source, pending + funcs))
        case _:
            return NotYetDone(_Chain(state, funcs))


# ============================================================================
# Core operations
# ============================================================================


def bind[A, B](expr: Eventually[A], func: Callable[[A], Eventually[B]], /) -> Eventually[B]:
    """
    Monadic bind.

    - Done(v): func(v) immediately
    - NotYetDone: a new NotYetDone; each step advances `expr` by one step
      and continues with func once it is Done
    """
    match expr:
        case Done(value):
            return func(value)
        case NotYetDone():
            return _suspend(expr, (func,))
        case _ as unreachable:
            typing.assert_never(unreachable)

def result[T](value: T, /) -> Done[T]:
    """Lift a value: Done(value)."""
    return Done(value)

def delay[T](func: Callable[[], Eventually[T]], /) -> NotYetDone[T]:
    """Defer func until the first step."""
    return NotYetDone(func)

def step[T](expr: Eventually[T], /) -> Eventually[T]:
    """
    Advance by exactly one step.

    Done is returned unchanged. Errors raised by the step propagate.
    """
    match expr:
        case Done():
            return expr
        case NotYetDone(work):
            return work()
        case _ as unreachable:
            typing.assert_never(unreachable)

def combine[B](first: Eventually[typing.Any], second: Eventually[B], /) -> Eventually[B]:
    """Run first, discard its value, continue with second."""
    return bind(first, lambda _: second)

# ============================================================================
# Exceptions
# ============================================================================


def catch[T](expr: Eventually[T], /) -> Eventually[OkOrException[T]]:
    """
    Capture errors step by step.

    Every step of `expr` is guarded on its own: an exception raised while
    stepping becomes Done(Error(exc)), completion becomes Done(Ok(value)).
    """
    match expr:
        case Done(value):
            return Done(Ok(value))
        case NotYetDone():
            return NotYetDone(_Catching(expr))
        case _ as unreachable:
            typing.assert_never(unreachable)

def try_with[T](
    expr: Eventually[T],
    handler: Callable[[Exception], Eventually[T]],
    /,
) -> Eventually[T]:
    """Continue with handler(exc) if any step of expr raises."""

    def recover(outcome: OkOrException[T]) -> Eventually[T]:
        match outcome:
            case Ok(value):
                return Done(value)
            case Error(exc):
                return handler(exc)

    return bind(catch(expr), recover)

def try_finally[T](expr: Eventually[T], compensation: Compensation, /) -> Eventually[T]:
    """
    Run compensation exactly once after expr finishes, normally or not.

    The value is passed on or the error re-raised afterwards. An error from
    compensation itself replaces the outcome.
    """

    def finish(outcome: OkOrException[T]) -> Eventually[T]:
        compensation()
        match outcome:
            case Ok(value):
                return Done(value)
            case Error(exc):
                raise exc

    return bind(catch(expr), finish)

# ============================================================================
# Loops and resources
# ============================================================================


def while_loop(predicate: Predicate, body: Eventually[typing.Any], /) -> Eventually[None]:
    """
    Repeat body while predicate() holds; predicate is checked fresh before
    every iteration.
    """
    while predicate():
        if isinstance(body, NotYetDone):
            return bind(body, lambda _: while_loop(predicate, body))
    return Done(None)

def for_loop[A](items: Iterable[A], func: Callable[[A], Eventually[typing.Any]], /) -> Eventually[None]:
    """
    Run func(item) for every item, one delayed body per element.

    The iterator is closed through try_finally on completion or error.
    """
    iterator = iter(items)
    sentinel = object()
    current: list[typing.Any] = [sentinel]

    def has_next() -> bool:
        current[0] = next(iterator, sentinel)
        return current[0] is not sentinel

    return try_finally(
        while_loop(has_next, delay(lambda: func(current[0]))),
        lambda: close_iterator(iterator),
    )

def using[R, T](resource: R, func: Callable[[R], Eventually[T]], /) -> Eventually[T]:
    """
    Run func(resource) and dispose the resource once it finishes.

    Disposal happens exactly once, after the last step, on success or error.
    """
    try:
        body = func(resource)
    except Exception:
        dispose(resource)
        raise
    return try_finally(body, lambda: dispose(resource))

__all__ = (
    # States
    "Done",
    "NotYetDone",
    "Eventually",
    # Core
    "bind",
    "result",
    "delay",
    "step",
    "combine",
    # Exceptions
    "catch",
    "try_with",
    "try_finally",
    # Loops and resources
    "while_loop",
    "for_loop",
    "using",
)
