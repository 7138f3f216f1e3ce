"""
Generic AST for computation expressions.

Architecture:
- Expr[M] - node that lowers itself into combinator calls on a Builder[M]
- Constructor functions (let, ret, seq, for_each, use, ...) build the tree
- compile_expr(builder, expr) / builder(expr) - the entry point

Lowering follows the usual desugaring table:

    {| let! x = e in ce |}     b.bind(e, fun x -> {| ce |})
    {| do! e; ce |}            b.bind(e, fun () -> {| ce |})
    {| return e |}             b.return_(e)
    {| return! e |}            b.return_from(e)
    {| ce1; ce2 |}             b.combine({| ce1 |}, b.delay(fun () -> {| ce2 |}))
    {| if e then ce |}         if e then {| ce |} else b.zero()
    {| while e do ce |}        b.while_loop(fun () -> e, b.delay(fun () -> {| ce |}))
    {| for x in e do ce |}     b.for_loop(e, fun x -> {| ce |})
    {| use x = e in ce |}      b.using(e, fun x -> {| ce |})
    {| try ce with h |}        b.try_with(b.delay(fun () -> {| ce |}), fun e -> {| h e |})
    {| try ce finally c |}     b.try_finally(b.delay(fun () -> {| ce |}), fun () -> c)

and the whole body is wrapped once: b.run(b.delay(fun () -> {| body |})).

Sources and iterables (`e` above) are thunks, so declaring an expression never runs
anything. Nodes carry no runtime state: the same tree can be lowered any
number of times, onto any builder that supports the nodes it uses.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ._types import Compensation, Predicate, Thunk

if typing.TYPE_CHECKING:
    from .builder import Builder


# ============================================================================
# Expression nodes
# ============================================================================


class Expr[M]:
    """
    AST node that can be lowered onto a Builder[M].
    """

    def lower(self, builder: Builder[M]) -> M:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Bind[A, M](Expr[M]):
    source: Thunk[typing.Any]
    then: Callable[[A], Expr[M]]

    def lower(self, builder: Builder[M]) -> M:
        return builder.bind(self.source(), lambda value: self.then(value).lower(builder))


@dataclass(frozen=True, slots=True)
class Return[M](Expr[M]):
    value: typing.Any

    def lower(self, builder: Builder[M]) -> M:
        return builder.return_(self.value)


@dataclass(frozen=True, slots=True)
class ReturnFrom[M](Expr[M]):
    source: Thunk[M]

    def lower(self, builder: Builder[M]) -> M:
        return builder.return_from(self.source())


@dataclass(frozen=True, slots=True)
class Zero[M](Expr[M]):
    def lower(self, builder: Builder[M]) -> M:
        return builder.zero()


@dataclass(frozen=True, slots=True)
class Effect[M](Expr[M]):
    """Plain side effect followed by the rest of the computation."""

    action: Callable[[], None]
    rest: Expr[M]

    def lower(self, builder: Builder[M]) -> M:
        self.action()
        return self.rest.lower(builder)


@dataclass(frozen=True, slots=True)
class Combine[M](Expr[M]):
    first: Expr[M]
    rest: Expr[M]

    def lower(self, builder: Builder[M]) -> M:
        return builder.combine(
            self.first.lower(builder),
            builder.delay(lambda: self.rest.lower(builder)),
        )


@dataclass(frozen=True, slots=True)
class If[M](Expr[M]):
    condition: Predicate
    then: Expr[M]
    otherwise: Expr[M] | None = None

    def lower(self, builder: Builder[M]) -> M:
        if self.condition():
            return self.then.lower(builder)
        if self.otherwise is None:
            return builder.zero()
        return self.otherwise.lower(builder)


@dataclass(frozen=True, slots=True)
class While[M](Expr[M]):
    predicate: Predicate
    body: Expr[M]

    def lower(self, builder: Builder[M]) -> M:
        return builder.while_loop(
            self.predicate,
            builder.delay(lambda: self.body.lower(builder)),
        )


@dataclass(frozen=True, slots=True)
class For[A, M](Expr[M]):
    items: Thunk[Iterable[A]]
    body: Callable[[A], Expr[M]]

    def lower(self, builder: Builder[M]) -> M:
        return builder.for_loop(self.items(), lambda item: self.body(item).lower(builder))


@dataclass(frozen=True, slots=True)
class Using[R, M](Expr[M]):
    acquire: Thunk[R]
    body: Callable[[R], Expr[M]]

    def lower(self, builder: Builder[M]) -> M:
        return builder.using(self.acquire(), lambda resource: self.body(resource).lower(builder))


@dataclass(frozen=True, slots=True)
class TryWith[M](Expr[M]):
    body: Expr[M]
    handler: Callable[[Exception], Expr[M]]

    def lower(self, builder: Builder[M]) -> M:
        return builder.try_with(
            builder.delay(lambda: self.body.lower(builder)),
            lambda error: self.handler(error).lower(builder),
        )


@dataclass(frozen=True, slots=True)
class TryFinally[M](Expr[M]):
    body: Expr[M]
    compensation: Compensation

    def lower(self, builder: Builder[M]) -> M:
        return builder.try_finally(
            builder.delay(lambda: self.body.lower(builder)),
            self.compensation,
        )


# ============================================================================
# Constructor functions
# ============================================================================


def let[A, M](source: Thunk[typing.Any], then: Callable[[A], Expr[M]]) -> Expr[M]:
    """`let! x = source() in then(x)`."""
    return Bind(source, then)


def do[M](source: Thunk[typing.Any], rest: Expr[M]) -> Expr[M]:
    """`do! source(); rest` - bind and discard the value."""
    return Bind(source, lambda _: rest)


def ret[M](value: typing.Any) -> Expr[M]:
    """`return value`."""
    return Return(value)


def ret_from[M](source: Thunk[M]) -> Expr[M]:
    """`return! source()`."""
    return ReturnFrom(source)


def zero[M]() -> Expr[M]:
    """Empty computation (`b.zero()`)."""
    return Zero()


def effect[M](action: Callable[[], None], rest: Expr[M] | None = None) -> Expr[M]:
    """Run a plain side effect, then `rest` (zero() when omitted)."""
    return Effect(action, rest if rest is not None else Zero())


def seq[M](first: Expr[M], *rest: Expr[M]) -> Expr[M]:
    """Sequence expressions with combine, right-nested."""
    exprs = (first, *rest)
    result = exprs[-1]
    for expr in reversed(exprs[:-1]):
        result = Combine(expr, result)
    return result


def when[M](
    condition: Predicate,
    then: Expr[M],
    otherwise: Expr[M] | None = None,
) -> Expr[M]:
    """`if condition() then ... [else ...]`."""
    return If(condition, then, otherwise)


def while_[M](predicate: Predicate, body: Expr[M]) -> Expr[M]:
    """`while predicate() do body`."""
    return While(predicate, body)


def for_each[A, M](items: Thunk[Iterable[A]], body: Callable[[A], Expr[M]]) -> Expr[M]:
    """`for item in items() do body(item)`; items() is called on every lowering."""
    return For(items, body)


def use[R, M](acquire: Thunk[R], body: Callable[[R], Expr[M]]) -> Expr[M]:
    """`use resource = acquire() in body(resource)`."""
    return Using(acquire, body)


def try_with[M](body: Expr[M], handler: Callable[[Exception], Expr[M]]) -> Expr[M]:
    """`try body with error -> handler(error)`."""
    return TryWith(body, handler)


def try_finally[M](body: Expr[M], compensation: Compensation) -> Expr[M]:
    """`try body finally compensation()`."""
    return TryFinally(body, compensation)


def compile_expr[M](builder: Builder[M], expr: Expr[M]) -> typing.Any:
    """Lower a whole computation: builder.run(builder.delay(...))."""
    return builder.run(builder.delay(lambda: expr.lower(builder)))


__all__ = (
    # Nodes
    "Expr",
    "Bind",
    "Return",
    "ReturnFrom",
    "Zero",
    "Effect",
    "Combine",
    "If",
    "While",
    "For",
    "Using",
    "TryWith",
    "TryFinally",
    # Constructors
    "let",
    "do",
    "ret",
    "ret_from",
    "zero",
    "effect",
    "seq",
    "when",
    "while_",
    "for_each",
    "use",
    "try_with",
    "try_finally",
    "compile_expr",
)
