from contextlib import ExitStack

import pytest

from sgraph.scopeguard import (
    ScopeGuard,
    on_scope_exit,
    on_scope_exit_failure,
    on_scope_exit_success,
)


def test_exit_on_failure_runs_exit_and_failure_handlers():
    out = []
    with pytest.raises(RuntimeError):
        with ExitStack() as stack:
            stack.enter_context(on_scope_exit_success(lambda: out.append("1")))
            stack.enter_context(on_scope_exit_failure(lambda: out.append("2")))
            stack.enter_context(on_scope_exit(lambda: out.append("3")))
            guard = stack.enter_context(ScopeGuard(lambda: out.append("4")))
            guard.cancel()
            raise RuntimeError("boom")
    assert "".join(out) == "32"


def test_exit_on_success_runs_exit_and_success_handlers():
    out = []
    with ExitStack() as stack:
        stack.enter_context(on_scope_exit_success(lambda: out.append("1")))
        stack.enter_context(on_scope_exit_failure(lambda: out.append("2")))
        stack.enter_context(on_scope_exit(lambda: out.append("3")))
        guard = stack.enter_context(ScopeGuard(lambda: out.append("4")))
        guard.cancel()
    assert "".join(out) == "31"


def test_guard_does_not_suppress_exception():
    calls = []
    with pytest.raises(KeyError):
        with on_scope_exit(lambda: calls.append(True)):
            raise KeyError("x")
    assert calls == [True]


def test_cancelled_guard_does_not_call():
    calls = []
    with on_scope_exit(lambda: calls.append(True)) as guard:
        guard.cancel()
    assert calls == []


def test_enter_returns_guard_itself():
    guard = ScopeGuard(lambda: None)
    with guard as entered:
        assert entered is guard


def test_requires_success_or_failure():
    with pytest.raises(ValueError):
        ScopeGuard(lambda: None, False, False)


def test_requires_callable():
    with pytest.raises(TypeError):
        ScopeGuard(42)


def test_handler_exception_propagates(capsys):
    def bad():
        raise ValueError("handler")

    with pytest.raises(ValueError, match="handler"):
        with on_scope_exit(bad):
            pass
    assert "Exception thrown during scope exit" in capsys.readouterr().err