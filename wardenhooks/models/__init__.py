"""wardenhooks data models — Pydantic v2 frozen models and str enums."""

from wardenhooks.models.hooks import (
    Hook,
    HookCategory,
    HookMode,
    HookSlot,
    PayloadKind,
    PlannedHook,
)
from wardenhooks.models.outcomes import (
    CheckResult,
    ExecutionErrors,
    ExecutionState,
    Outcome,
)
from wardenhooks.models.reports import (
    DispatchReport,
    ExecutionRecord,
    HookFailure,
    HookInvocation,
)
from wardenhooks.models.transitions import CATEGORY_SEQUENCE, FIRST_TIME_TRIGGERS

__all__ = [
    # hooks
    "Hook",
    "HookCategory",
    "HookMode",
    "HookSlot",
    "PayloadKind",
    "PlannedHook",
    # outcomes
    "CheckResult",
    "ExecutionErrors",
    "ExecutionState",
    "Outcome",
    # transitions
    "CATEGORY_SEQUENCE",
    "FIRST_TIME_TRIGGERS",
    # reports
    "DispatchReport",
    "ExecutionRecord",
    "HookFailure",
    "HookInvocation",
]
