"""Scope guards: call a function when a ``with`` block is left."""

from __future__ import annotations

import sys
from types import TracebackType
from typing import Callable

__all__ = ["ScopeGuard", "on_scope_exit", "on_scope_exit_success", "on_scope_exit_failure"]


class ScopeGuard:
    """Call ``handler`` on leaving the block, after success, failure or both.

    The guard never suppresses an exception raised in the block.
    """

    def __init__(
        self,
        handler: Callable[[], object],
        on_success: bool = True,
        on_failure: bool = True,
    ) -> None:
        if not (on_success or on_failure):
            raise ValueError("at least one of on_success or on_failure must be true")
        if not callable(handler):
            raise TypeError("handler must be callable with no arguments")
        self._handler = handler
        self._on_success = on_success
        self._on_failure = on_failure
        self._cancelled = False

    def cancel(self) -> None:
        """Keep the handler from being called."""
        self._cancelled = True

    def __enter__(self) -> "ScopeGuard":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self._cancelled:
            return False
        failed = exc_type is not None
        if (self._on_success and not failed) or (self._on_failure and failed):
            try:
                self._handler()
            except BaseException:
                print("Exception thrown during scope exit", file=sys.stderr)
                raise
        return False


def on_scope_exit(handler: Callable[[], object]) -> ScopeGuard:
    """Guard that calls ``handler`` whenever the block is left."""
    return ScopeGuard(handler, True, True)


def on_scope_exit_success(handler: Callable[[], object]) -> ScopeGuard:
    """Guard that calls ``handler`` only when the block finishes without an exception."""
    return ScopeGuard(handler, True, False)


def on_scope_exit_failure(handler: Callable[[], object]) -> ScopeGuard:
    """Guard that calls ``handler`` only when the block is left by an exception."""
    return ScopeGuard(handler, False, True)