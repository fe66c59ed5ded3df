"""Outcome transition rules — which hook categories fire for which transition.

The evaluator in ``wardenhooks.core.evaluator`` is a thin interpreter over
these two tables.
"""

from __future__ import annotations

from wardenhooks.models.hooks import HookCategory
from wardenhooks.models.outcomes import ExecutionState

# Categories considered for a cycle, in firing order.  Errored cycles do not
# fire the success/failure/completed families.
CATEGORY_SEQUENCE: dict[ExecutionState, tuple[HookCategory, ...]] = {
    ExecutionState.SUCCEEDED: (
        HookCategory.ON_SUCCESS,
        HookCategory.ON_FIRST_SUCCESS,
        HookCategory.ON_COMPLETED,
    ),
    ExecutionState.FAILED: (
        HookCategory.ON_FAILURE,
        HookCategory.ON_FIRST_FAILURE,
        HookCategory.ON_COMPLETED,
    ),
    ExecutionState.ERRORED: (
        HookCategory.ON_ERROR,
        HookCategory.ON_FIRST_ERROR,
    ),
}

# Previous states (None = no previous cycle) that make a first-time
# category fire.  An errored previous cycle counts as "not succeeded", so
# ERRORED -> FAILED is not a fresh failure.
FIRST_TIME_TRIGGERS: dict[HookCategory, frozenset[ExecutionState | None]] = {
    HookCategory.ON_FIRST_SUCCESS: frozenset(
        {None, ExecutionState.FAILED, ExecutionState.ERRORED}
    ),
    HookCategory.ON_FIRST_FAILURE: frozenset(
        {None, ExecutionState.SUCCEEDED}
    ),
    HookCategory.ON_FIRST_ERROR: frozenset(
        {None, ExecutionState.SUCCEEDED, ExecutionState.FAILED}
    ),
}
