"""Option monad

Eager short-circuiting presence/absence on top of kungfu's Option.
Everything runs immediately, in call order."""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Error, Nothing, Ok, Option, Some

from .._types import OkOrException
from ..notation import DoGenerator, advance

def bind[A, B](opt: Option[A], func: Callable[[A], Option[B]], /) -> Option[B]:
    """
    Monadic bind.

    - Some(v): returns func(v)
    - Nothing: returns Nothing without calling func
    """
    match opt:
        case Some(value):
            return func(value)
        case Nothing():
            return Nothing()
        case _ as unreachable:
            typing.assert_never(unreachable)

def result[T](value: T, /) -> Option[T]:
    """Lift a value: Some(value)."""
    return Some(value)

def absent() -> Option[object]:
    """The empty Option."""
    return Nothing()

def is_present(opt: Option[object], /) -> bool:
    return isinstance(opt, Some)

def from_generator(
    gen: DoGenerator,
    force: Callable[[typing.Any], Option[typing.Any]],
    /,
) -> Option[typing.Any]:
    """
    Drive a do-notation generator over Options in a loop.

    force(source) turns every yielded value into an Option. Some(v) sends v
    back, Nothing closes the generator and is the result, and an exception
    raised by force is thrown into the generator at its yield.
    """
    outcome: OkOrException[typing.Any] = Ok(None)
    while True:
        try:
            source = advance(gen, outcome)
        except StopIteration as stop:
            return Some(stop.value)
        try:
            forced = force(source)
        except Exception as exc:
            outcome = Error(exc)
            continue
        match forced:
            case Some(value):
                outcome = Ok(value)
            case Nothing():
                gen.close()
                return forced
            case _ as unreachable:
                typing.assert_never(unreachable)

__all__ = (
    "bind",
    "result",
    "absent",
    "is_present",
    "from_generator",
)
