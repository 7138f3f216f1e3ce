"""Internal helpers for builders.

Resource and iterator release shared by the using/for_loop implementations
of every monad. Not part of the public API but usable by custom builders."""

from __future__ import annotations

import typing
from collections.abc import Iterator

from ._types import Resource

def dispose(resource: Resource) -> None:
    """
    Release a resource through close() or dispose().

    Errors raised by the release are not suppressed: inside a finally they
    replace whatever outcome was in flight.
    """
    release = getattr(resource, "close", None)
    if release is None:
        release = getattr(resource, "dispose", None)
    if release is None:
        raise TypeError(f"{type(resource).__name__} has neither close() nor dispose()")
    release()

def close_iterator(iterator: Iterator[typing.Any]) -> None:
    """
    Run the iterator's optional disposal hook.

    Generators expose close(); plain iterators have nothing to release.
    """
    close = getattr(iterator, "close", None)
    if close is not None:
        close()

__all__ = (
    "dispose",
    "close_iterator",
)
