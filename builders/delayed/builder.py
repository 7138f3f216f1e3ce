"""DelayedOptionBuilder

Same surface as MaybeBuilder, but every operation is performed inside a
DelayedOption thunk. run() is the identity: lowering an expression gives an
unrun DelayedOption, and effects only happen when it is run."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from kungfu import Option, Some

from .._helpers import close_iterator, dispose
from .._types import Compensation, Predicate, Thunk
from ..builder import Builder
from ..notation import DoGenerator
from ..option import monad as option
from . import monad
from .monad import DelayedOption


def _as_delayed[T](source: DelayedOption[T] | Option[T]) -> DelayedOption[T]:
    if isinstance(source, DelayedOption):
        return source
    return monad.lift(source)


class DelayedOptionBuilder(Builder[DelayedOption[typing.Any]]):
    """Builder for DelayedOption: `delayed_maybe(expr)` / `@delayed_maybe.do`."""

    def bind[A](
        self,
        source: DelayedOption[A] | Option[A],
        func: Callable[[A], DelayedOption[typing.Any]],
        /,
    ) -> DelayedOption[typing.Any]:
        return monad.bind(_as_delayed(source), func)

    def return_(self, value: typing.Any, /) -> DelayedOption[typing.Any]:
        return monad.result(value)

    def return_from(
        self,
        computation: DelayedOption[typing.Any] | Option[typing.Any],
        /,
    ) -> DelayedOption[typing.Any]:
        return _as_delayed(computation)

    def delay(self, func: Thunk[DelayedOption[typing.Any]], /) -> DelayedOption[typing.Any]:
        return DelayedOption(lambda: func().run())

    def from_generator(self, gen: DoGenerator, /) -> DelayedOption[typing.Any]:
        return DelayedOption(lambda: option.from_generator(gen, lambda source: _as_delayed(source).run()))

    def zero(self) -> DelayedOption[typing.Any]:
        return monad.result(None)

    def combine(
        self,
        first: DelayedOption[typing.Any],
        rest: DelayedOption[typing.Any],
        /,
    ) -> DelayedOption[typing.Any]:
        return monad.bind(first, lambda _: rest)

    def try_with(
        self,
        body: DelayedOption[typing.Any],
        handler: Callable[[Exception], DelayedOption[typing.Any]],
        /,
    ) -> DelayedOption[typing.Any]:
        def run_guarded() -> Option[typing.Any]:
            try:
                return body.run()
            except Exception as exc:
                return handler(exc).run()

        return DelayedOption(run_guarded)

    def try_finally(
        self,
        body: DelayedOption[typing.Any],
        compensation: Compensation,
        /,
    ) -> DelayedOption[typing.Any]:
        def run_guarded() -> Option[typing.Any]:
            try:
                return body.run()
            finally:
                compensation()

        return DelayedOption(run_guarded)

    def while_loop(
        self,
        predicate: Predicate,
        body: DelayedOption[typing.Any],
        /,
    ) -> DelayedOption[typing.Any]:
        def run_loop() -> Option[typing.Any]:
            while predicate():
                if not option.is_present(outcome := body.run()):
                    return outcome
            return Some(None)

        return DelayedOption(run_loop)

    def for_loop[A](
        self,
        items: Iterable[A],
        func: Callable[[A], DelayedOption[typing.Any]],
        /,
    ) -> DelayedOption[typing.Any]:
        def run_loop() -> Option[typing.Any]:
            iterator = iter(items)
            try:
                for item in iterator:
                    if not option.is_present(outcome := func(item).run()):
                        return outcome
                return Some(None)
            finally:
                close_iterator(iterator)

        return DelayedOption(run_loop)

    def using[R](
        self,
        resource: R,
        func: Callable[[R], DelayedOption[typing.Any]],
        /,
    ) -> DelayedOption[typing.Any]:
        def run_scoped() -> Option[typing.Any]:
            try:
                return func(resource).run()
            finally:
                dispose(resource)

        return DelayedOption(run_scoped)


delayed_maybe = DelayedOptionBuilder()

__all__ = ("DelayedOptionBuilder", "delayed_maybe")
