"""Outcome transition evaluator — decides which hooks fire for a cycle.

Pure functions over (previous, current, errors, registry).  The rules
themselves live in ``wardenhooks.models.transitions``:

- An execution with errors is *errored*, whatever its outcome.  It fires
  the error family only.
- Otherwise it is *succeeded* or *failed* and fires that family followed by
  ``on_completed``.
- A first-time category fires only when the previous cycle's state is one
  of its ``FIRST_TIME_TRIGGERS``.  No previous cycle always qualifies.

Within a category all synchronous hooks precede all asynchronous ones.
"""

from __future__ import annotations

from collections.abc import Iterable

from wardenhooks.core.registry import HookRegistry
from wardenhooks.models.hooks import HookCategory, HookMode, HookSlot, PlannedHook
from wardenhooks.models.outcomes import ExecutionErrors, ExecutionState, Outcome
from wardenhooks.models.transitions import CATEGORY_SEQUENCE, FIRST_TIME_TRIGGERS

PreviousLike = ExecutionState | Outcome | None
ErrorsLike = ExecutionErrors | Iterable[BaseException] | None


def classify(current: Outcome, errors: ErrorsLike = None) -> ExecutionState:
    """Return the state of a cycle; any error makes it ERRORED."""
    if ExecutionErrors.coerce(errors):
        return ExecutionState.ERRORED
    return current.state


def as_state(previous: PreviousLike) -> ExecutionState | None:
    """Normalize a previous-cycle value to an ``ExecutionState`` or None."""
    if previous is None:
        return None
    if isinstance(previous, Outcome):
        return previous.state
    return ExecutionState(previous)


def select_categories(
    previous: PreviousLike, state: ExecutionState
) -> tuple[HookCategory, ...]:
    """Return the categories that fire for ``previous -> state``, in order."""
    prior = as_state(previous)
    selected: list[HookCategory] = []
    for category in CATEGORY_SEQUENCE[state]:
        if category.is_first_time and prior not in FIRST_TIME_TRIGGERS[category]:
            continue
        selected.append(category)
    return tuple(selected)


def plan(
    previous: PreviousLike,
    current: Outcome,
    errors: ErrorsLike,
    registry: HookRegistry,
) -> list[PlannedHook]:
    """Return the ordered (slot, hook) invocations for one execution cycle.

    Parameters
    ----------
    previous:
        State of the previous cycle for the same watcher, or None if this is
        its first execution.  An ``Outcome`` is accepted as shorthand for a
        non-errored previous cycle.
    current:
        The outcome of this cycle.  Ignored for classification when
        *errors* is non-empty.
    errors:
        Exceptions raised during this cycle.
    registry:
        The hooks to choose from.

    Returns
    -------
    list[PlannedHook]
        Empty when nothing is registered for the selected categories.
    """
    if registry.is_empty:
        return []

    state = classify(current, errors)
    planned: list[PlannedHook] = []
    for category in select_categories(previous, state):
        for mode in (HookMode.SYNC, HookMode.ASYNC):
            slot = HookSlot.of(category, mode)
            planned.extend(
                PlannedHook(slot=slot, hook=hook) for hook in registry.hooks_for(slot)
            )
    return planned
