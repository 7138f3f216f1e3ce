"""
Pytest configuration for builders tests.

Provides a Recorder fixture: an effect log plus helpers that build
computations and resources which write to it, so tests can assert exactly
when (and how often) each effect happened.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest

from builders.resumable import Done, NotYetDone


class TrackedResource:
    """Resource that logs acquisition and release."""

    def __init__(self, recorder: Recorder, name: str, *, fail_on_close: bool = False) -> None:
        self.recorder = recorder
        self.name = name
        self.fail_on_close = fail_on_close
        self.closes = 0
        recorder.note(f"enter-{name}")

    def close(self) -> None:
        self.closes += 1
        self.recorder.note(f"exit-{self.name}")
        if self.fail_on_close:
            raise RuntimeError(f"{self.name}: close failed")


class DisposableResource:
    """Resource released through dispose() instead of close()."""

    def __init__(self) -> None:
        self.disposals = 0

    def dispose(self) -> None:
        self.disposals += 1


@dataclass
class Recorder:
    log: list[str] = field(default_factory=list)

    def note(self, label: str) -> None:
        self.log.append(label)

    def noting(self, label: str, value: Any = None) -> Any:
        self.log.append(label)
        return value

    def tick(self, label: str, value: Any = None) -> NotYetDone[Any]:
        """One-step computation that logs `label` when stepped."""

        def work() -> Done[Any]:
            self.log.append(label)
            return Done(value)

        return NotYetDone(work)

    def resource(self, name: str = "resource", *, fail_on_close: bool = False) -> TrackedResource:
        return TrackedResource(self, name, fail_on_close=fail_on_close)

    def sequence[T](self, items: Iterable[T]) -> Iterator[T]:
        """Generator over items that logs when it is closed or exhausted."""

        def gen() -> Iterator[T]:
            try:
                yield from items
            finally:
                self.log.append("iterator-closed")

        return gen()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def disposable() -> DisposableResource:
    return DisposableResource()
