"""MaybeBuilder

Builder for the eager Option monad. delay() hands back the body unevaluated
and run() calls it straight away, so a whole `maybe(...)` expression executes
at the point where it is declared. Keeping the body as a thunk until run()
lets try_with/try_finally wrap it with native Python control flow."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from kungfu import Option, Some

from .._helpers import close_iterator, dispose
from .._types import Compensation, Predicate, Thunk
from ..builder import Builder
from ..notation import DoGenerator
from . import monad


class MaybeBuilder(Builder[Option[typing.Any]]):
    """Builder for kungfu Option: `maybe(expr)` / `@maybe.do`."""

    def bind[A](
        self,
        source: Option[A],
        func: Callable[[A], Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        return monad.bind(source, func)

    def return_(self, value: typing.Any, /) -> Option[typing.Any]:
        return monad.result(value)

    def return_from(self, computation: Option[typing.Any], /) -> Option[typing.Any]:
        return computation

    def delay(self, func: Thunk[Option[typing.Any]], /) -> Thunk[Option[typing.Any]]:
        return func

    def run(self, delayed: Thunk[Option[typing.Any]], /) -> Option[typing.Any]:
        return delayed()

    def from_generator(self, gen: DoGenerator, /) -> Option[typing.Any]:
        return monad.from_generator(gen, lambda source: source)

    def zero(self) -> Option[typing.Any]:
        # NOTE: An empty branch counts as present so that `if` without `else`
        #       does not abort the rest of the sequence.
        return Some(None)

    def combine(
        self,
        first: Option[typing.Any],
        rest: Thunk[Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        return monad.bind(first, lambda _: rest())

    def try_with(
        self,
        body: Thunk[Option[typing.Any]],
        handler: Callable[[Exception], Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        try:
            return body()
        except Exception as exc:
            return handler(exc)

    def try_finally(
        self,
        body: Thunk[Option[typing.Any]],
        compensation: Compensation,
        /,
    ) -> Option[typing.Any]:
        try:
            return body()
        finally:
            compensation()

    def while_loop(
        self,
        predicate: Predicate,
        body: Thunk[Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        while predicate():
            if not monad.is_present(outcome := body()):
                return outcome
        return Some(None)

    def for_loop[A](
        self,
        items: Iterable[A],
        func: Callable[[A], Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        iterator = iter(items)
        try:
            for item in iterator:
                if not monad.is_present(outcome := func(item)):
                    return outcome
            return Some(None)
        finally:
            close_iterator(iterator)

    def using[R](
        self,
        resource: R,
        func: Callable[[R], Option[typing.Any]],
        /,
    ) -> Option[typing.Any]:
        try:
            return func(resource)
        finally:
            dispose(resource)


maybe = MaybeBuilder()

__all__ = ("MaybeBuilder", "maybe")
