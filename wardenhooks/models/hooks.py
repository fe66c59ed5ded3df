"""Hook models — categories, modes, the 14 registration slots, and hook values."""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Any, Callable, Hashable

from pydantic import BaseModel, ConfigDict


class HookMode(str, Enum):
    """How a hook is invoked by the dispatcher."""

    SYNC = "sync"  # called, return value ignored
    ASYNC = "async"  # called, returned awaitable is awaited


class PayloadKind(str, Enum):
    """What a hook receives when it fires."""

    RESULTS = "results"  # the outcome's check results
    ERRORS = "errors"  # the execution's exceptions


class HookCategory(str, Enum):
    """Outcome category a hook reacts to."""

    ON_SUCCESS = "on_success"
    ON_FIRST_SUCCESS = "on_first_success"
    ON_FAILURE = "on_failure"
    ON_FIRST_FAILURE = "on_first_failure"
    ON_COMPLETED = "on_completed"
    ON_ERROR = "on_error"
    ON_FIRST_ERROR = "on_first_error"

    @property
    def payload_kind(self) -> PayloadKind:
        if self in (HookCategory.ON_ERROR, HookCategory.ON_FIRST_ERROR):
            return PayloadKind.ERRORS
        return PayloadKind.RESULTS

    @property
    def is_first_time(self) -> bool:
        """Whether the category only fires on a transition into its state."""
        return self.value.startswith("on_first_")


class HookSlot(str, Enum):
    """One (category, mode) storage bucket of a registry."""

    ON_SUCCESS = "on_success"
    ON_SUCCESS_ASYNC = "on_success_async"
    ON_FIRST_SUCCESS = "on_first_success"
    ON_FIRST_SUCCESS_ASYNC = "on_first_success_async"
    ON_FAILURE = "on_failure"
    ON_FAILURE_ASYNC = "on_failure_async"
    ON_FIRST_FAILURE = "on_first_failure"
    ON_FIRST_FAILURE_ASYNC = "on_first_failure_async"
    ON_COMPLETED = "on_completed"
    ON_COMPLETED_ASYNC = "on_completed_async"
    ON_ERROR = "on_error"
    ON_ERROR_ASYNC = "on_error_async"
    ON_FIRST_ERROR = "on_first_error"
    ON_FIRST_ERROR_ASYNC = "on_first_error_async"

    @property
    def category(self) -> HookCategory:
        return HookCategory(self.value.removesuffix("_async"))

    @property
    def mode(self) -> HookMode:
        return HookMode.ASYNC if self.value.endswith("_async") else HookMode.SYNC

    @classmethod
    def of(cls, category: HookCategory, mode: HookMode) -> HookSlot:
        """Return the slot holding *mode* hooks of *category*."""
        suffix = "_async" if mode == HookMode.ASYNC else ""
        return cls(f"{category.value}{suffix}")


class Hook:
    """A registered callback plus the key it is deduplicated by.

    Two hooks are equal when their keys are equal.  By default the key is
    the callback itself, so registering the same function (or an equal bound
    method, or two equal dataclass instances) twice yields one hook.  Pass
    ``key`` to deduplicate structurally, e.g. two lambdas built for the same
    notification target.  Unhashable keys are compared by equality only.

    Parameters
    ----------
    callback:
        The callable to invoke.  Synchronous hooks receive the payload and
        return nothing; asynchronous hooks return an awaitable.
    key:
        Optional stable equality key.
    name:
        Optional display name used in logs and reports.
    """

    __slots__ = ("callback", "key", "name", "_hash")

    def __init__(
        self,
        callback: Callable[..., Any],
        *,
        key: Hashable | None = None,
        name: str | None = None,
    ) -> None:
        self.callback = callback
        self.key = callback if key is None else key
        self.name = name or _callable_name(callback)
        try:
            self._hash = hash(self.key)
        except TypeError:
            # unhashable keys (e.g. dataclasses with __eq__) share a per-type
            # hash; __eq__ decides
            self._hash = hash(type(self.key))

    @property
    def is_coroutine_function(self) -> bool:
        return inspect.iscoroutinefunction(self.callback)

    def __call__(self, payload: tuple[Any, ...]) -> Any:
        return self.callback(payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hook):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"Hook(name={self.name!r})"


def _callable_name(callback: Callable[..., Any]) -> str:
    qualname = getattr(callback, "__qualname__", None)
    if qualname:
        return qualname
    return type(callback).__name__


class PlannedHook(BaseModel):
    """One entry of an execution plan: a hook and the slot it fires from."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    slot: HookSlot
    hook: Hook

    @property
    def category(self) -> HookCategory:
        return self.slot.category

    @property
    def mode(self) -> HookMode:
        return self.slot.mode

    def as_pair(self) -> tuple[HookSlot, Hook]:
        return self.slot, self.hook
