"""Drivers for Eventually

The monad never drains itself; these loops call step() on the caller's
behalf. Errors raised by a step surface unchanged from the driver, at the
step where they happen.

Stopping early is always allowed. An abandoned computation is dropped as is:
try_finally/using compensations that were still pending never run."""

from __future__ import annotations

import logging
import typing
from collections.abc import Iterator
from dataclasses import dataclass

from .._errors import StepLimitExceededError
from .monad import Done, Eventually, NotYetDone, step

logger = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class DrivePolicy:
    """Configuration for run_to_completion and interleave."""

    max_steps: int | None = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("DrivePolicy.max_steps must be >= 0")

def _resolve(policy: DrivePolicy | None, max_steps: int | None) -> DrivePolicy:
    if policy is not None:
        if max_steps is not None:
            raise ValueError("pass either 'policy' or 'max_steps', not both")
        return policy
    return DrivePolicy(max_steps=max_steps)

def steps[T](expr: Eventually[T], /) -> Iterator[Eventually[T]]:
    """
    Step until Done, yielding the state reached after every step.

    When expr is NotYetDone, the last state yielded is the Done state; an
    expr that is already Done yields nothing. Stop iterating to pause the
    computation; resume by driving the last yielded state.
    """
    state = expr
    while isinstance(state, NotYetDone):
        state = step(state)
        yield state

def run_to_completion[T](
    expr: Eventually[T],
    /,
    *,
    policy: DrivePolicy | None = None,
    max_steps: int | None = None,
) -> T:
    """
    Step until Done and return the value.

    Raises StepLimitExceededError when max_steps steps are not enough.
    """
    policy = _resolve(policy, max_steps)
    state = expr
    taken = 0
    while isinstance(state, NotYetDone):
        if policy.max_steps is not None and taken >= policy.max_steps:
            raise StepLimitExceededError(taken)
        state = step(state)
        taken += 1
    logger.debug("computation done after %d steps", taken)
    return state.value

def interleave(
    *exprs: Eventually[typing.Any],
    policy: DrivePolicy | None = None,
    max_steps: int | None = None,
) -> list[typing.Any]:
    """
    Cooperative round-robin: one step of each unfinished computation per
    round, until all are Done. Results come back in argument order.

    The step budget applies to each computation separately.
    """
    policy = _resolve(policy, max_steps)
    states: list[Eventually[typing.Any]] = list(exprs)
    taken = [0] * len(states)
    rounds = 0
    while any(isinstance(state, NotYetDone) for state in states):
        for index, state in enumerate(states):
            if isinstance(state, Done):
                continue
            if policy.max_steps is not None and taken[index] >= policy.max_steps:
                raise StepLimitExceededError(taken[index])
            states[index] = step(state)
            taken[index] += 1
        rounds += 1
    logger.debug("%d computations done after %d rounds", len(states), rounds)
    return [typing.cast(Done[typing.Any], state).value for state in states]

__all__ = (
    "DrivePolicy",
    "steps",
    "run_to_completion",
    "interleave",
)
