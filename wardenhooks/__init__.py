"""wardenhooks: outcome-transition hooks for recurring health-check watchers.

Callbacks are registered per outcome category (success, failure, completed,
error) in "every time" and "first time" flavours, synchronous or async, and
selected for each execution from the transition between the previous and
current outcome.
"""

__version__ = "0.1.0"
__description__ = "Outcome-transition hook registry and dispatcher for watchers"

from wardenhooks.core.dispatcher import HookDispatcher, HookInvocationError
from wardenhooks.core.evaluator import classify, plan, select_categories
from wardenhooks.core.history import ExecutionHistory
from wardenhooks.core.registry import HookRegistry, HookRegistryBuilder, InvalidHookError
from wardenhooks.models import (
    CheckResult,
    DispatchReport,
    ExecutionErrors,
    ExecutionState,
    Hook,
    HookCategory,
    HookMode,
    HookSlot,
    Outcome,
    PlannedHook,
)

__all__ = [
    "CheckResult",
    "DispatchReport",
    "ExecutionErrors",
    "ExecutionHistory",
    "ExecutionState",
    "Hook",
    "HookCategory",
    "HookDispatcher",
    "HookInvocationError",
    "HookMode",
    "HookRegistry",
    "HookRegistryBuilder",
    "HookSlot",
    "InvalidHookError",
    "Outcome",
    "PlannedHook",
    "classify",
    "plan",
    "select_categories",
    "__version__",
]
