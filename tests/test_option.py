"""Tests for the eager Option monad and MaybeBuilder."""

import pytest
from kungfu import Nothing, Some

from builders import (
    effect,
    for_each,
    let,
    maybe,
    ret,
    ret_from,
    seq,
    try_finally,
    try_with,
    use,
    when,
    while_,
)
from builders.option import absent, bind, is_present, result


def get_jorah():
    return Some("Jorah Mormont")


def get_barristan():
    return Some("Barristan Selmy")


def get_tyrion():
    return Nothing()


def test_bind_applies_function_to_present_value():
    assert bind(Some(2), lambda x: Some(x * 10)).unwrap() == 20


def test_bind_short_circuits_on_absent():
    calls = []
    outcome = bind(Nothing(), lambda x: calls.append(x) or Some(x))
    assert isinstance(outcome, Nothing)
    assert calls == []


@pytest.mark.parametrize("source", [None, 5, "Jorah"])
def test_bind_rejects_non_option_source(source):
    with pytest.raises(AssertionError):
        bind(source, lambda x: Some(x))


def test_result_and_absent():
    assert result(5).unwrap() == 5
    assert isinstance(absent(), Nothing)
    assert is_present(result(None))
    assert not is_present(absent())


def test_council_meets_only_when_everyone_is_present():
    def can_meet_nested():
        match get_jorah():
            case Some(_):
                match get_barristan():
                    case Some(_):
                        match get_tyrion():
                            case Some(_):
                                return True
        return False

    council = maybe(
        let(get_jorah, lambda jorah:
        let(get_barristan, lambda barristan:
        let(get_tyrion, lambda tyrion:
        ret(True))))
    )

    assert isinstance(council, Nothing)
    assert can_meet_nested() is False


def test_effects_run_at_declaration_in_order(recorder):
    outcome = maybe(
        effect(lambda: recorder.note("first"),
        let(lambda: Some(1), lambda x:
        effect(lambda: recorder.note("second"),
        ret(x + 1))))
    )

    assert recorder.log == ["first", "second"]
    assert outcome.unwrap() == 2


def test_absent_source_skips_the_rest(recorder):
    outcome = maybe(
        let(get_tyrion, lambda tyrion:
        effect(lambda: recorder.note("unreachable"), ret(tyrion)))
    )

    assert isinstance(outcome, Nothing)
    assert recorder.log == []


def test_return_from_passes_option_through():
    assert maybe(ret_from(lambda: Some("x"))).unwrap() == "x"
    assert isinstance(maybe(ret_from(get_tyrion)), Nothing)


def test_if_without_else_does_not_abort_sequence():
    outcome = maybe(seq(when(lambda: False, ret(1)), ret(2)))
    assert outcome.unwrap() == 2


def test_for_loop_visits_items_and_closes_iterator(recorder):
    outcome = maybe(
        seq(
            for_each(lambda: recorder.sequence([1, 2, 3]), lambda i: effect(lambda: recorder.note(f"item-{i}"))),
            ret("done"),
        )
    )

    assert outcome.unwrap() == "done"
    assert recorder.log == ["item-1", "item-2", "item-3", "iterator-closed"]


def test_for_loop_stops_at_first_absent_body(recorder):
    def body(i):
        if i == 2:
            return ret_from(get_tyrion)
        return effect(lambda: recorder.note(f"item-{i}"))

    outcome = maybe(for_each(lambda: recorder.sequence([1, 2, 3]), body))

    assert isinstance(outcome, Nothing)
    assert recorder.log == ["item-1", "iterator-closed"]


def test_while_loop_reevaluates_predicate(recorder):
    outcome = maybe(
        seq(
            while_(lambda: len(recorder.log) < 3, effect(lambda: recorder.note("tick"))),
            ret_from(lambda: Some(len(recorder.log))),
        )
    )

    assert outcome.unwrap() == 3
    assert recorder.log == ["tick", "tick", "tick"]


def test_using_disposes_after_body(recorder):
    outcome = maybe(
        use(recorder.resource, lambda r: effect(lambda: recorder.note("body"), ret(r.name)))
    )

    assert outcome.unwrap() == "resource"
    assert recorder.log == ["enter-resource", "body", "exit-resource"]


def test_try_with_replaces_error_with_handler_result():
    def explode():
        raise ValueError("boom")

    outcome = maybe(try_with(effect(explode), lambda exc: ret(str(exc))))
    assert outcome.unwrap() == "boom"


def test_try_finally_runs_compensation_and_reraises(recorder):
    def explode():
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        maybe(try_finally(effect(explode), lambda: recorder.note("cleanup")))

    assert recorder.log == ["cleanup"]
