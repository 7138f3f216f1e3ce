"""Tests for generator do-notation across builders."""

import pytest
from kungfu import Error, LazyCoroResult, Nothing, Some

from builders import DelayedOption, delayed_maybe, eventually, maybe, run_to_completion, step, task
from builders.delayed import lift
from builders.resumable import Done, delay, result

LONG = 5_000


def explode():
    raise ValueError("boom")


def failing(exc):
    async def run():
        return Error(exc)

    return LazyCoroResult(run)


def test_maybe_do_binds_each_yield():
    @maybe.do
    def add(a, b):
        x = yield Some(a)
        y = yield Some(b)
        return x + y

    assert add(1, 2).unwrap() == 3


def test_maybe_do_short_circuits(recorder):
    @maybe.do
    def council():
        jorah = yield Some("Jorah Mormont")
        recorder.note(jorah)
        tyrion = yield Nothing()
        recorder.note(tyrion)
        return True

    assert isinstance(council(), Nothing)
    assert recorder.log == ["Jorah Mormont"]


def test_delayed_do_runs_a_fresh_generator_per_run(recorder):
    @delayed_maybe.do
    def fetch():
        recorder.note("start")
        value = yield Some(5)
        return value * 2

    computation = fetch()
    assert isinstance(computation, DelayedOption)
    assert recorder.log == []

    assert computation.run().unwrap() == 10
    assert computation.run().unwrap() == 10
    assert recorder.log == ["start", "start"]


def test_eventually_do_suspends_between_yields(recorder):
    @eventually.do
    def work():
        a = yield recorder.tick("a", 1)
        b = yield recorder.tick("b", 2)
        return a + b

    computation = work()
    assert recorder.log == []
    assert run_to_completion(computation) == 3
    assert recorder.log == ["a", "b"]


def test_do_preserves_function_metadata():
    @eventually.do
    def documented():
        """Docstring."""
        return (yield eventually.return_(1))

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring."


@pytest.mark.asyncio
async def test_task_do_awaits_each_yield():
    @task.do
    def total():
        a = yield task.return_(2)
        b = yield task.return_(3)
        return a * b

    result = await total()
    assert result.unwrap() == 6


def test_maybe_do_handles_many_yields():
    @maybe.do
    def count():
        total = 0
        for i in range(LONG):
            total += yield Some(i)
        return total

    assert count().unwrap() == sum(range(LONG))


def test_maybe_do_closes_generator_on_absent(recorder):
    @maybe.do
    def scoped():
        try:
            yield Nothing()
            recorder.note("unreachable")
        finally:
            recorder.note("closed")

    assert isinstance(scoped(), Nothing)
    assert recorder.log == ["closed"]


def test_delayed_do_handles_many_yields():
    @delayed_maybe.do
    def count():
        total = 0
        for i in range(LONG):
            total += yield lift(Some(i))
        return total

    assert count().run().unwrap() == sum(range(LONG))


def test_delayed_do_throws_source_errors_into_generator():
    @delayed_maybe.do
    def guarded():
        try:
            yield DelayedOption(explode)
        except ValueError as exc:
            return f"handled {exc}"

    assert guarded().run().unwrap() == "handled boom"


def test_eventually_do_handles_many_completed_yields():
    @eventually.do
    def count():
        total = 0
        for i in range(LONG):
            total += yield Done(i)
        return total

    assert run_to_completion(count()) == sum(range(LONG))


def test_eventually_do_handles_many_suspending_yields():
    @eventually.do
    def count():
        total = 0
        for i in range(LONG):
            total += yield delay(lambda i=i: result(i))
        return total

    assert run_to_completion(count()) == sum(range(LONG))


def test_eventually_do_throws_step_errors_into_generator(recorder):
    @eventually.do
    def guarded():
        try:
            yield recorder.tick("before")
            yield delay(explode)
            recorder.note("unreachable")
        except ValueError as exc:
            return f"handled {exc}"

    assert run_to_completion(guarded()) == "handled boom"
    assert recorder.log == ["before"]


def test_eventually_do_unhandled_error_surfaces_at_its_step(recorder):
    @eventually.do
    def failing_work():
        yield recorder.tick("a")
        yield delay(explode)

    state = step(failing_work())
    state = step(state)
    assert recorder.log == ["a"]
    with pytest.raises(ValueError, match="boom"):
        step(state)


@pytest.mark.asyncio
async def test_task_do_handles_many_yields():
    @task.do
    def count():
        total = 0
        for i in range(LONG):
            total += yield task.return_(i)
        return total

    assert (await count()).unwrap() == sum(range(LONG))


@pytest.mark.asyncio
async def test_task_do_throws_errors_into_generator():
    @task.do
    def guarded():
        try:
            yield failing(KeyError("missing"))
        except KeyError:
            return "from result"

    @task.do
    def guarded_raise():
        try:
            yield task.delay(explode)
        except ValueError:
            return "from raise"

    assert (await guarded()).unwrap() == "from result"
    assert (await guarded_raise()).unwrap() == "from raise"


@pytest.mark.asyncio
async def test_task_do_unhandled_errors():
    @task.do
    def unhandled_result():
        yield failing(KeyError("missing"))
        return "unreachable"

    @task.do
    def unhandled_raise():
        yield task.delay(explode)

    match await unhandled_result():
        case Error(exc):
            assert isinstance(exc, KeyError)
        case other:
            pytest.fail(f"expected Error, got {other!r}")

    with pytest.raises(ValueError, match="boom"):
        await unhandled_raise()
