"""Shared test fixtures for wardenhooks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from wardenhooks.core.dispatcher import HookDispatcher
from wardenhooks.core.history import ExecutionHistory
from wardenhooks.core.registry import HookRegistry
from wardenhooks.models.hooks import Hook, HookMode, HookSlot
from wardenhooks.models.outcomes import CheckResult


class CallLog:
    """Collects (hook name, payload) pairs in invocation order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def payload_of(self, name: str) -> tuple[Any, ...]:
        for called, payload in self.calls:
            if called == name:
                return payload
        raise KeyError(name)


@pytest.fixture
def call_log() -> CallLog:
    """Provide an empty CallLog."""
    return CallLog()


@pytest.fixture
def make_hook(call_log: CallLog) -> Callable[..., Hook]:
    """Factory fixture: build a named sync or async hook that logs its calls."""

    def _factory(name: str, mode: HookMode = HookMode.SYNC) -> Hook:
        if mode == HookMode.ASYNC:
            async def callback(payload: tuple[Any, ...]) -> None:
                call_log.calls.append((name, payload))
        else:
            def callback(payload: tuple[Any, ...]) -> None:
                call_log.calls.append((name, payload))
        return Hook(callback, key=name, name=name)

    return _factory


@pytest.fixture
def full_registry(make_hook: Callable[..., Hook]) -> HookRegistry:
    """Provide a registry with one logging hook per slot, named after the slot."""
    builder = HookRegistry.create()
    for slot in HookSlot:
        builder.register(slot, make_hook(slot.value, slot.mode))
    return builder.build()


@pytest.fixture
def history() -> ExecutionHistory:
    """Provide a fresh ExecutionHistory."""
    return ExecutionHistory(max_records=50)


@pytest.fixture
def dispatcher(history: ExecutionHistory) -> HookDispatcher:
    """Provide a HookDispatcher that isolates failures and has no timeout."""
    return HookDispatcher(history, isolate_failures=True)


@pytest.fixture
def watcher_name() -> str:
    """Provide a deterministic watcher name."""
    return "api-health"


@pytest.fixture
def check_results() -> tuple[CheckResult, ...]:
    """Provide two valid check results."""
    return (
        CheckResult(watcher_name="api", is_valid=True, description="200 OK"),
        CheckResult(watcher_name="db", is_valid=True, description="ping ok"),
    )
