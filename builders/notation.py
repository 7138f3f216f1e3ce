"""Generator do-notation

Write a computation as a generator function: every `yield m` is a bind whose
value is sent back into the generator, and `return v` lowers to return_(v).

    @eventually.do
    def fetch_both():
        a = yield fetch_a()
        b = yield fetch_b()
        try:
            c = yield fetch_c()
        except LookupError:
            c = None
        return a, b, c

The generator is created inside builder.delay, so a delayed computation runs
a fresh generator every time it is run and nothing executes at declaration.

Each builder lowers the started generator through Builder.from_generator.
The reference builders drive it in a loop: completed values are sent straight
back, so the stack does not grow with the number of yields, and an error from
a yielded computation is thrown into the generator at its `yield`. The
default for other builders is resume(): one bind per yield, without error
routing."""

from __future__ import annotations

import functools
import typing
from collections.abc import Callable, Generator

from kungfu import Error, Ok

from ._types import OkOrException

if typing.TYPE_CHECKING:
    from .builder import Builder

type DoGenerator = Generator[typing.Any, typing.Any, typing.Any]


def do[**P, M](
    builder: Builder[M],
    func: Callable[P, DoGenerator],
) -> Callable[P, typing.Any]:
    """Turn a generator function into a function building a computation."""

    @functools.wraps(func)
    def build(*args: P.args, **kwargs: P.kwargs) -> typing.Any:
        def body() -> M:
            return builder.from_generator(func(*args, **kwargs))

        return builder.run(builder.delay(body))

    return build


def advance(gen: DoGenerator, outcome: OkOrException[typing.Any]) -> typing.Any:
    """
    Send Ok(value) into gen or throw Error(exc) into it.

    Returns the next yielded computation. Raises StopIteration when gen
    returns, and whatever gen lets escape otherwise.
    """
    match outcome:
        case Ok(value):
            return gen.send(value)
        case Error(exc):
            return gen.throw(exc)


def resume[M](builder: Builder[M], gen: DoGenerator, value: typing.Any) -> M:
    """Bind-per-yield lowering for builders without their own driver."""
    try:
        source = gen.send(value)
    except StopIteration as stop:
        return builder.return_(stop.value)
    return builder.bind(source, lambda result: resume(builder, gen, result))


__all__ = ("DoGenerator", "advance", "do", "resume")
