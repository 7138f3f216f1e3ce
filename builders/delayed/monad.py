"""DelayedOption Monad

Option behind an explicit suspension thunk:
- Lazy (nothing runs until run())
- Option[T] (presence/absence, short-circuiting)

Constructing a computation has no observable effects. Every run() re-invokes
the thunk, so effects happen once per run, left to right."""

from __future__ import annotations

import functools
from collections.abc import Callable

from kungfu import Nothing, Option, Some

from ..option import monad as option


class DelayedOption[T]:
    """Lazy Option monad.

    Monadic laws (observed through run()):
    - Left identity: result(a).then(f) ≡ f(a)
    - Right identity: m.then(result) ≡ m
    - Associativity: m.then(f).then(g) ≡ m.then(x => f(x).then(g))
    """

    __slots__ = ("_value",)

    def __init__(self, value: Callable[[], Option[T]], /) -> None:
        """Create DelayedOption from a fn returning Option."""
        self._value = value

    # Monad operations

    def then[U](self, func: Callable[[T], DelayedOption[U]], /) -> DelayedOption[U]:
        """Monadic bind, performed inside the thunk."""
        return bind(self, func)

    def map[U](self, func: Callable[[T], U], /) -> DelayedOption[U]:
        """Functor fmap - apply function to the present value."""

        def run_mapped() -> Option[U]:
            return option.bind(self.run(), lambda value: Some(func(value)))

        return DelayedOption(run_mapped)

    # Utility operations

    def cache(self) -> DelayedOption[T]:
        """Memoize - the thunk runs on the first run() only."""
        return DelayedOption(functools.cache(self._value))

    def run(self) -> Option[T]:
        """Invoke the thunk now."""
        return self._value()

    # Protocol methods

    def __call__(self) -> Option[T]:
        return self._value()

    def __repr__(self) -> str:
        return f"DelayedOption({self._value!r})"


def delay[T](thunk: Callable[[], Option[T]], /) -> DelayedOption[T]:
    """Store thunk without invoking it."""
    return DelayedOption(thunk)

def run[T](delayed: DelayedOption[T], /) -> Option[T]:
    """Invoke the stored thunk and return its Option."""
    return delayed.run()

def bind[A, B](
    delayed: DelayedOption[A],
    func: Callable[[A], DelayedOption[B]],
    /,
) -> DelayedOption[B]:
    """
    Monadic bind.

    The returned computation runs `delayed`, then - only when present -
    runs func(value). Nothing is evaluated before run().
    """

    def run_bound() -> Option[B]:
        return option.bind(delayed.run(), lambda value: func(value).run())

    return DelayedOption(run_bound)

def result[T](value: T, /) -> DelayedOption[T]:
    """Lift a value: run() gives Some(value)."""
    return DelayedOption(lambda: Some(value))

def lift[T](opt: Option[T], /) -> DelayedOption[T]:
    """Wrap an already computed Option."""
    return DelayedOption(lambda: opt)

def absent() -> DelayedOption[object]:
    """Computation whose run() gives Nothing."""
    return DelayedOption(Nothing)

__all__ = (
    "DelayedOption",
    "delay",
    "run",
    "bind",
    "result",
    "lift",
    "absent",
)
