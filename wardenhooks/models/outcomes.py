"""Execution outcome models — what one watcher cycle produced."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field


class ExecutionState(str, Enum):
    """Classification of one execution cycle.

    This is the value the execution history remembers between cycles.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERRORED = "errored"


class CheckResult(BaseModel):
    """Result of a single watcher check inside an execution."""

    model_config = ConfigDict(frozen=True)

    watcher_name: str
    is_valid: bool
    description: str = ""
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def execution_time(self) -> timedelta:
        return self.completed_at - self.started_at


class Outcome(BaseModel):
    """Immutable snapshot of an execution that reached a verdict.

    ``results`` is an ordered sequence of per-check results.  The items are
    opaque to the hook layer; they are handed to hooks as-is.
    """

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    results: tuple[Any, ...] = ()

    @classmethod
    def success(cls, results: Iterable[Any] = ()) -> Outcome:
        return cls(succeeded=True, results=tuple(results))

    @classmethod
    def failure(cls, results: Iterable[Any] = ()) -> Outcome:
        return cls(succeeded=False, results=tuple(results))

    @classmethod
    def from_results(cls, results: Iterable[Any]) -> Outcome:
        """Build an outcome that succeeded only if every result is valid.

        Results without an ``is_valid`` attribute count as valid.
        """
        items = tuple(results)
        succeeded = all(getattr(item, "is_valid", True) for item in items)
        return cls(succeeded=succeeded, results=items)

    @property
    def state(self) -> ExecutionState:
        return ExecutionState.SUCCEEDED if self.succeeded else ExecutionState.FAILED


class ExecutionErrors(BaseModel):
    """Exceptions raised while executing a watcher cycle.

    A non-empty collection means the cycle could not decide between success
    and failure.  Order carries no meaning.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    exceptions: tuple[BaseException, ...] = ()

    @classmethod
    def coerce(
        cls, errors: ExecutionErrors | Iterable[BaseException] | None
    ) -> ExecutionErrors:
        """Accept an ``ExecutionErrors``, any iterable of exceptions, or None."""
        if errors is None:
            return _NO_ERRORS
        if isinstance(errors, ExecutionErrors):
            return errors
        return cls(exceptions=tuple(errors))

    @property
    def is_empty(self) -> bool:
        return not self.exceptions

    def __len__(self) -> int:
        return len(self.exceptions)

    def __bool__(self) -> bool:
        return bool(self.exceptions)


_NO_ERRORS = ExecutionErrors()
