"""
Builder protocol
================

A builder is the object a computation description is lowered onto. It exposes
the capability set

    bind, return_, return_from, delay, run, zero, combine,
    try_with, try_finally, while_loop, for_loop, using

and may implement it partially. Two capabilities have defaults:

- delay(f) = f()   (no suspension)
- run(m)   = m     (nothing to start)

Every other capability raises UnsupportedOperationError until overridden.

For custom monads:
1. Subclass Builder and override the capabilities your monad supports
2. Lower expressions with `builder(expr)` (see builders.ast)
3. Or write generator functions decorated with `@builder.do`
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from ._errors import UnsupportedOperationError
from ._types import Compensation, Predicate, Thunk

if typing.TYPE_CHECKING:
    from .ast import Expr
    from .notation import DoGenerator


class Builder[M]:
    """Base class for computation builders over the monadic type M."""

    # Core operations

    def bind[A](self, source: typing.Any, func: Callable[[A], M], /) -> M:
        """Monadic bind: sequence `source`, feed its value to `func`."""
        raise self._unsupported("bind")

    def return_(self, value: typing.Any, /) -> M:
        """Lift a plain value."""
        raise self._unsupported("return_")

    def return_from(self, computation: M, /) -> M:
        """Return an existing computation as the result."""
        raise self._unsupported("return_from")

    def delay(self, func: Thunk[M], /) -> typing.Any:
        return func()

    def run(self, delayed: typing.Any, /) -> typing.Any:
        return delayed

    def zero(self) -> M:
        """Result of a branch that produces nothing."""
        raise self._unsupported("zero")

    def combine(self, first: M, rest: typing.Any, /) -> M:
        """Sequence two computations; `rest` comes from delay()."""
        raise self._unsupported("combine")

    # Control flow

    def try_with(self, body: typing.Any, handler: Callable[[Exception], M], /) -> M:
        raise self._unsupported("try_with")

    def try_finally(self, body: typing.Any, compensation: Compensation, /) -> M:
        raise self._unsupported("try_finally")

    def while_loop(self, predicate: Predicate, body: typing.Any, /) -> M:
        raise self._unsupported("while_loop")

    def for_loop[A](self, items: Iterable[A], func: Callable[[A], M], /) -> M:
        raise self._unsupported("for_loop")

    def using[R](self, resource: R, func: Callable[[R], M], /) -> M:
        raise self._unsupported("using")

    # Dispatch

    def from_generator(self, gen: DoGenerator, /) -> typing.Any:
        """
        Lower a started do-notation generator.

        The default binds once per yield (see notation.resume); builders
        override it to drive the generator iteratively.
        """
        from .notation import resume
        return resume(self, gen, None)

    def __call__(self, expr: Expr[M], /) -> typing.Any:
        """Lower an expression: run(delay(lambda: expr.lower(self)))."""
        from .ast import compile_expr
        return compile_expr(self, expr)

    def do[**P](
        self,
        func: Callable[P, typing.Generator[typing.Any, typing.Any, typing.Any]],
        /,
    ) -> Callable[P, typing.Any]:
        """Decorate a generator function: each `yield m` binds m."""
        from .notation import do
        return do(self, func)

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(type(self).__name__, operation)


__all__ = ("Builder",)
