"""Dispatch and history records — immutable audit of what fired."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from wardenhooks.models.hooks import HookCategory, HookSlot
from wardenhooks.models.outcomes import ExecutionState


class HookFailure(BaseModel):
    """A hook that raised, timed out, or returned the wrong kind of value."""

    model_config = ConfigDict(frozen=True)

    slot: HookSlot
    hook_name: str
    error_type: str
    error_message: str = ""


class HookInvocation(BaseModel):
    """One hook started during a cycle, identified by the slot it fired from."""

    model_config = ConfigDict(frozen=True)

    slot: HookSlot
    hook_name: str


class DispatchReport(BaseModel):
    """Outcome of dispatching one execution cycle's hooks."""

    model_config = ConfigDict(frozen=True)

    watcher_name: str
    previous_state: ExecutionState | None = None
    state: ExecutionState
    fired_categories: tuple[HookCategory, ...] = ()
    invoked: tuple[HookInvocation, ...] = ()  # in invocation order
    failures: tuple[HookFailure, ...] = ()
    aborted: bool = False
    dispatched_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def succeeded(self) -> bool:
        """True when every planned hook ran without failing."""
        return not self.failures and not self.aborted

    @property
    def invoked_names(self) -> tuple[str, ...]:
        return tuple(i.hook_name for i in self.invoked)

    def failure_for(self, invocation: HookInvocation) -> HookFailure | None:
        """Return the failure recorded for *invocation*, if it failed."""
        for failure in self.failures:
            if (failure.slot, failure.hook_name) == (invocation.slot, invocation.hook_name):
                return failure
        return None


class ExecutionRecord(BaseModel):
    """One entry of the execution history log."""

    model_config = ConfigDict(frozen=True)

    watcher_name: str
    sequence: int
    previous_state: ExecutionState | None = None
    state: ExecutionState
    fired_categories: tuple[HookCategory, ...] = ()
    recorded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def is_transition(self) -> bool:
        return self.previous_state != self.state
