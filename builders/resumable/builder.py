"""EventuallyBuilder

delay() suspends (NotYetDone), run() is the identity: lowering an expression
gives a computation that has not taken a single step yet."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from kungfu import Ok

from .._types import Compensation, OkOrException, Predicate, Thunk
from ..builder import Builder
from ..notation import DoGenerator, advance
from . import monad
from .monad import Done, Eventually, NotYetDone


class EventuallyBuilder(Builder[Eventually[typing.Any]]):
    """Builder for step-resumable computations: `eventually(expr)` / `@eventually.do`."""

    def bind[A](
        self,
        source: Eventually[A],
        func: Callable[[A], Eventually[typing.Any]],
        /,
    ) -> Eventually[typing.Any]:
        return monad.bind(source, func)

    def return_(self, value: typing.Any, /) -> Eventually[typing.Any]:
        return monad.result(value)

    def return_from(self, computation: Eventually[typing.Any], /) -> Eventually[typing.Any]:
        return computation

    def delay(self, func: Thunk[Eventually[typing.Any]], /) -> Eventually[typing.Any]:
        return monad.delay(func)

    def from_generator(self, gen: DoGenerator, /) -> Eventually[typing.Any]:
        return _resume(gen, Ok(None))

    def zero(self) -> Eventually[typing.Any]:
        return monad.result(None)

    def combine(
        self,
        first: Eventually[typing.Any],
        rest: Eventually[typing.Any],
        /,
    ) -> Eventually[typing.Any]:
        return monad.combine(first, rest)

    def try_with(
        self,
        body: Eventually[typing.Any],
        handler: Callable[[Exception], Eventually[typing.Any]],
        /,
    ) -> Eventually[typing.Any]:
        return monad.try_with(body, handler)

    def try_finally(
        self,
        body: Eventually[typing.Any],
        compensation: Compensation,
        /,
    ) -> Eventually[typing.Any]:
        return monad.try_finally(body, compensation)

    def while_loop(
        self,
        predicate: Predicate,
        body: Eventually[typing.Any],
        /,
    ) -> Eventually[typing.Any]:
        return monad.while_loop(predicate, body)

    def for_loop[A](
        self,
        items: Iterable[A],
        func: Callable[[A], Eventually[typing.Any]],
        /,
    ) -> Eventually[typing.Any]:
        return monad.for_loop(items, func)

    def using[R](
        self,
        resource: R,
        func: Callable[[R], Eventually[typing.Any]],
        /,
    ) -> Eventually[typing.Any]:
        return monad.using(resource, func)


def _resume(gen: DoGenerator, outcome: OkOrException[typing.Any]) -> Eventually[typing.Any]:
    """
    Run gen up to its next suspended yield.

    Done values are sent straight back in a loop. A NotYetDone is bound
    through catch(), so a failing step reaches the generator as gen.throw().
    """
    while True:
        try:
            source = advance(gen, outcome)
        except StopIteration as stop:
            return Done(stop.value)
        match source:
            case Done(value):
                outcome = Ok(value)
            case NotYetDone():
                return monad.bind(monad.catch(source), lambda caught: _resume(gen, caught))
            case _ as unreachable:
                typing.assert_never(unreachable)


eventually = EventuallyBuilder()

__all__ = ("EventuallyBuilder", "eventually")
