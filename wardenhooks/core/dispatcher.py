"""HookDispatcher — runs a cycle's planned hooks and advances the history.

Hooks are independent observers.  A failing hook is logged and recorded in
the ``DispatchReport`` but does not stop its siblings, unless the
dispatcher was created with ``isolate_failures=False``, in which case the
first failure aborts the rest of the cycle with ``HookInvocationError``.

Categories run one after another in plan order.  Inside a category the
synchronous hooks are called first, in order; the asynchronous hooks are
then started together and all awaited before the next category begins.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable
from typing import Any

from wardenhooks.config import config
from wardenhooks.core.evaluator import classify, plan, select_categories
from wardenhooks.core.history import ExecutionHistory
from wardenhooks.core.registry import HookRegistry
from wardenhooks.models.hooks import HookCategory, HookMode, PayloadKind, PlannedHook
from wardenhooks.models.outcomes import ExecutionErrors, Outcome
from wardenhooks.models.reports import DispatchReport, HookFailure, HookInvocation

logger = logging.getLogger(__name__)

# hook_timeout default: read config.hook_timeout_seconds
_USE_CONFIG: Any = object()


class HookInvocationError(RuntimeError):
    """Raised in abort mode when a hook fails.

    The partial ``DispatchReport`` of the aborted cycle is attached as
    ``report``.
    """

    def __init__(self, report: DispatchReport) -> None:
        failure = report.failures[-1]
        super().__init__(
            f"Hook {failure.hook_name} ({failure.slot.value}) failed for watcher "
            f"{report.watcher_name}: {failure.error_type}: {failure.error_message}"
        )
        self.report = report


class HookDispatcher:
    """Executes hook plans for any number of watchers.

    Parameters
    ----------
    history:
        Where previous cycle states are read from and written to.  A new
        ``ExecutionHistory`` is created if not provided.
    isolate_failures:
        Keep running sibling hooks after a failure.  Defaults to
        ``config.isolate_hook_failures``.
    hook_timeout:
        Seconds to wait for each asynchronous hook.  None waits
        indefinitely, even when the config sets a timeout.  Defaults to
        ``config.hook_timeout_seconds``.

    Usage
    -----
    >>> dispatcher = HookDispatcher()
    >>> report = dispatcher.run("api-health", registry, Outcome.failure(results))
    >>> report.fired_categories
    (<HookCategory.ON_FAILURE: 'on_failure'>, ...)
    """

    def __init__(
        self,
        history: ExecutionHistory | None = None,
        *,
        isolate_failures: bool | None = None,
        hook_timeout: float | None = _USE_CONFIG,
    ) -> None:
        self._history = (
            history if history is not None
            else ExecutionHistory(max_records=config.history_max_records)
        )
        self._isolate_failures = (
            config.isolate_hook_failures if isolate_failures is None else isolate_failures
        )
        self._hook_timeout = (
            config.hook_timeout_seconds if hook_timeout is _USE_CONFIG else hook_timeout
        )

    @property
    def history(self) -> ExecutionHistory:
        return self._history

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(
        self,
        watcher_name: str,
        registry: HookRegistry,
        current: Outcome,
        errors: ExecutionErrors | Iterable[BaseException] | None = None,
    ) -> DispatchReport:
        """Run every hook selected for this cycle and record the cycle.

        Returns
        -------
        DispatchReport
            What fired, in order, and which hooks failed.

        Raises
        ------
        HookInvocationError
            Only when failures are not isolated.  The history is advanced
            before raising.
        """
        execution_errors = ExecutionErrors.coerce(errors)
        previous = self._history.previous(watcher_name)
        state = classify(current, execution_errors)
        fired = select_categories(previous, state)
        planned = plan(previous, current, execution_errors, registry)

        invoked: list[HookInvocation] = []
        failures: list[HookFailure] = []
        aborted = False

        for category in fired:
            entries = [p for p in planned if p.category == category]
            if not entries:
                continue
            payload = self._payload_for(category, current, execution_errors)
            aborted = await self._run_category(
                watcher_name, entries, payload, invoked, failures
            )
            if aborted:
                break

        self._history.record(watcher_name, state, fired)
        report = DispatchReport(
            watcher_name=watcher_name,
            previous_state=previous,
            state=state,
            fired_categories=fired,
            invoked=tuple(invoked),
            failures=tuple(failures),
            aborted=aborted,
        )

        if failures:
            logger.warning(
                "Watcher %s: %d/%d hooks failed%s",
                watcher_name,
                len(failures),
                len(invoked),
                " (cycle aborted)" if aborted else "",
            )
        else:
            logger.info(
                "Watcher %s (%s): dispatched %d hooks",
                watcher_name,
                state.value,
                len(invoked),
            )

        if aborted:
            raise HookInvocationError(report)
        return report

    def run(
        self,
        watcher_name: str,
        registry: HookRegistry,
        current: Outcome,
        errors: ExecutionErrors | Iterable[BaseException] | None = None,
    ) -> DispatchReport:
        """Synchronous wrapper around ``dispatch`` for callers without a loop."""
        return asyncio.run(self.dispatch(watcher_name, registry, current, errors))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _payload_for(
        category: HookCategory, current: Outcome, errors: ExecutionErrors
    ) -> tuple[Any, ...]:
        if category.payload_kind == PayloadKind.ERRORS:
            return errors.exceptions
        return current.results

    async def _run_category(
        self,
        watcher_name: str,
        entries: list[PlannedHook],
        payload: tuple[Any, ...],
        invoked: list[HookInvocation],
        failures: list[HookFailure],
    ) -> bool:
        """Run one category's hooks.  Returns True if the cycle must abort."""
        for entry in entries:
            if entry.mode != HookMode.SYNC:
                continue
            invoked.append(_invocation(entry))
            failure = self._invoke_sync(watcher_name, entry, payload)
            if failure is not None:
                failures.append(failure)
                if not self._isolate_failures:
                    return True

        async_entries = [e for e in entries if e.mode == HookMode.ASYNC]
        if not async_entries:
            return False

        invoked.extend(_invocation(e) for e in async_entries)
        outcomes = await asyncio.gather(
            *(self._invoke_async(watcher_name, e, payload) for e in async_entries)
        )
        new_failures = [f for f in outcomes if f is not None]
        failures.extend(new_failures)
        return bool(new_failures) and not self._isolate_failures

    def _invoke_sync(
        self, watcher_name: str, entry: PlannedHook, payload: tuple[Any, ...]
    ) -> HookFailure | None:
        try:
            result = entry.hook(payload)
            if inspect.iscoroutine(result):
                result.close()
                raise TypeError(
                    "synchronous hook returned a coroutine; register it as async"
                )
        except Exception as exc:  # noqa: BLE001
            return self._failure(watcher_name, entry, exc)
        return None

    async def _invoke_async(
        self, watcher_name: str, entry: PlannedHook, payload: tuple[Any, ...]
    ) -> HookFailure | None:
        try:
            pending = entry.hook(payload)
            if not inspect.isawaitable(pending):
                raise TypeError(
                    f"asynchronous hook returned {type(pending).__name__}, "
                    "expected an awaitable"
                )
            if self._hook_timeout is None:
                await pending
            else:
                try:
                    await asyncio.wait_for(pending, timeout=self._hook_timeout)
                except asyncio.TimeoutError:
                    raise TimeoutError(
                        f"timed out after {self._hook_timeout}s"
                    ) from None
        except Exception as exc:  # noqa: BLE001
            return self._failure(watcher_name, entry, exc)
        return None

    @staticmethod
    def _failure(watcher_name: str, entry: PlannedHook, exc: Exception) -> HookFailure:
        error_message = str(exc)
        logger.error(
            "Hook %s (%s) failed for watcher %s: %s",
            entry.hook.name,
            entry.slot.value,
            watcher_name,
            error_message,
        )
        return HookFailure(
            slot=entry.slot,
            hook_name=entry.hook.name,
            error_type=type(exc).__name__,
            error_message=error_message,
        )


def _invocation(entry: PlannedHook) -> HookInvocation:
    return HookInvocation(slot=entry.slot, hook_name=entry.hook.name)
