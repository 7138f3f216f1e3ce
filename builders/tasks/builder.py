"""TaskBuilder

Builder for async tasks: kungfu LazyCoroResult whose error channel carries
exceptions. Tasks are lazy, so delay() only postpones building the body until
the task is awaited and run() is the identity.

Error(exc) results short-circuit bind like in any Result monad. try_with
handles both an Error result and an exception raised while awaiting the body."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from kungfu import Error, LazyCoroResult, Ok, Result

from .._helpers import close_iterator, dispose
from .._types import Compensation, OkOrException, Predicate, Task, Thunk
from ..builder import Builder
from ..notation import DoGenerator, advance


class TaskBuilder(Builder[Task[typing.Any]]):
    """Builder for LazyCoroResult tasks: `task(expr)` / `@task.do`."""

    def bind[A](
        self,
        source: Task[A],
        func: Callable[[A], Task[typing.Any]],
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            r = await source()
            match r:
                case Ok(value):
                    return await func(value)()
                case Error(exc):
                    return Error(exc)

        return LazyCoroResult(run)

    def return_(self, value: typing.Any, /) -> Task[typing.Any]:
        return LazyCoroResult.pure(value)

    def return_from(self, computation: Task[typing.Any], /) -> Task[typing.Any]:
        return computation

    def delay(self, func: Thunk[Task[typing.Any]], /) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            return await func()()

        return LazyCoroResult(run)

    def from_generator(self, gen: DoGenerator, /) -> Task[typing.Any]:
        """
        Await every yielded task inside one coroutine.

        An Error result or a raised exception is thrown into the generator at
        its yield. If the generator lets an Error result escape, the task
        ends with that Error; an escaping raised exception propagates.
        """

        async def run() -> Result[typing.Any, Exception]:
            outcome: OkOrException[typing.Any] = Ok(None)
            raised = False
            while True:
                try:
                    source = advance(gen, outcome)
                except StopIteration as stop:
                    return Ok(stop.value)
                except Exception as exc:
                    match outcome:
                        case Error(failure) if failure is exc and not raised:
                            return outcome
                    raise
                try:
                    outcome, raised = await source(), False
                except Exception as exc:
                    outcome, raised = Error(exc), True

        return LazyCoroResult(run)

    def zero(self) -> Task[typing.Any]:
        return LazyCoroResult.pure(None)

    def combine(
        self,
        first: Task[typing.Any],
        rest: Task[typing.Any],
        /,
    ) -> Task[typing.Any]:
        return self.bind(first, lambda _: rest)

    def try_with(
        self,
        body: Task[typing.Any],
        handler: Callable[[Exception], Task[typing.Any]],
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            try:
                r = await body()
            except Exception as exc:
                return await handler(exc)()
            match r:
                case Ok(_):
                    return r
                case Error(exc):
                    return await handler(exc)()

        return LazyCoroResult(run)

    def try_finally(
        self,
        body: Task[typing.Any],
        compensation: Compensation,
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            try:
                return await body()
            finally:
                compensation()

        return LazyCoroResult(run)

    def while_loop(
        self,
        predicate: Predicate,
        body: Task[typing.Any],
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            while predicate():
                r = await body()
                match r:
                    case Error(_):
                        return r
            return Ok(None)

        return LazyCoroResult(run)

    def for_loop[A](
        self,
        items: Iterable[A],
        func: Callable[[A], Task[typing.Any]],
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            iterator = iter(items)
            try:
                for item in iterator:
                    r = await func(item)()
                    match r:
                        case Error(_):
                            return r
                return Ok(None)
            finally:
                close_iterator(iterator)

        return LazyCoroResult(run)

    def using[R](
        self,
        resource: R,
        func: Callable[[R], Task[typing.Any]],
        /,
    ) -> Task[typing.Any]:
        async def run() -> Result[typing.Any, Exception]:
            try:
                return await func(resource)()
            finally:
                dispose(resource)

        return LazyCoroResult(run)


task = TaskBuilder()

__all__ = ("TaskBuilder", "task")
