"""Tests for the outcome transition evaluator — classification, selection, plans."""

from __future__ import annotations

import pytest

from wardenhooks.core.evaluator import as_state, classify, plan, select_categories
from wardenhooks.core.registry import HookRegistry
from wardenhooks.models.hooks import Hook, HookCategory, HookMode, HookSlot
from wardenhooks.models.outcomes import ExecutionErrors, ExecutionState, Outcome

SUCCEEDED = ExecutionState.SUCCEEDED
FAILED = ExecutionState.FAILED
ERRORED = ExecutionState.ERRORED

_PREVIOUS = [None, SUCCEEDED, FAILED, ERRORED]


def _categories(planned) -> set[HookCategory]:
    return {p.category for p in planned}


class TestClassify:
    def test_success(self):
        assert classify(Outcome.success(), None) == SUCCEEDED

    def test_failure(self):
        assert classify(Outcome.failure(), []) == FAILED

    @pytest.mark.parametrize("outcome", [Outcome.success(), Outcome.failure()])
    def test_errors_win_over_outcome(self, outcome: Outcome):
        assert classify(outcome, [RuntimeError("boom")]) == ERRORED

    def test_empty_execution_errors_not_errored(self):
        assert classify(Outcome.success(), ExecutionErrors()) == SUCCEEDED


class TestAsState:
    def test_none(self):
        assert as_state(None) is None

    def test_outcome(self):
        assert as_state(Outcome.failure()) == FAILED

    def test_string_value(self):
        assert as_state("errored") == ERRORED  # type: ignore[arg-type]


class TestSelectCategories:
    def test_first_success(self):
        assert select_categories(None, SUCCEEDED) == (
            HookCategory.ON_SUCCESS,
            HookCategory.ON_FIRST_SUCCESS,
            HookCategory.ON_COMPLETED,
        )

    def test_repeated_success(self):
        assert select_categories(SUCCEEDED, SUCCEEDED) == (
            HookCategory.ON_SUCCESS,
            HookCategory.ON_COMPLETED,
        )

    def test_success_after_failure(self):
        assert HookCategory.ON_FIRST_SUCCESS in select_categories(FAILED, SUCCEEDED)

    def test_success_after_error(self):
        assert HookCategory.ON_FIRST_SUCCESS in select_categories(ERRORED, SUCCEEDED)

    def test_first_failure(self):
        assert select_categories(None, FAILED) == (
            HookCategory.ON_FAILURE,
            HookCategory.ON_FIRST_FAILURE,
            HookCategory.ON_COMPLETED,
        )

    def test_failure_after_success(self):
        assert select_categories(SUCCEEDED, FAILED) == (
            HookCategory.ON_FAILURE,
            HookCategory.ON_FIRST_FAILURE,
            HookCategory.ON_COMPLETED,
        )

    def test_repeated_failure(self):
        assert select_categories(FAILED, FAILED) == (
            HookCategory.ON_FAILURE,
            HookCategory.ON_COMPLETED,
        )

    def test_failure_after_error_is_not_first_failure(self):
        assert select_categories(ERRORED, FAILED) == (
            HookCategory.ON_FAILURE,
            HookCategory.ON_COMPLETED,
        )

    @pytest.mark.parametrize("previous", [None, SUCCEEDED, FAILED])
    def test_first_error(self, previous):
        assert select_categories(previous, ERRORED) == (
            HookCategory.ON_ERROR,
            HookCategory.ON_FIRST_ERROR,
        )

    def test_repeated_error(self):
        assert select_categories(ERRORED, ERRORED) == (HookCategory.ON_ERROR,)

    @pytest.mark.parametrize("previous", _PREVIOUS)
    def test_errored_never_completes(self, previous):
        selected = select_categories(previous, ERRORED)
        assert HookCategory.ON_COMPLETED not in selected
        assert HookCategory.ON_SUCCESS not in selected
        assert HookCategory.ON_FAILURE not in selected

    @pytest.mark.parametrize("previous", _PREVIOUS)
    @pytest.mark.parametrize("current", [SUCCEEDED, FAILED])
    def test_completed_is_last_for_verdicts(self, previous, current):
        assert select_categories(previous, current)[-1] == HookCategory.ON_COMPLETED

    def test_accepts_outcome_as_previous(self):
        assert select_categories(Outcome.success(), SUCCEEDED) == (
            HookCategory.ON_SUCCESS,
            HookCategory.ON_COMPLETED,
        )


class TestPlan:
    @pytest.mark.parametrize("previous", _PREVIOUS)
    @pytest.mark.parametrize("current", [Outcome.success(), Outcome.failure()])
    @pytest.mark.parametrize("errors", [None, [RuntimeError("x")]])
    def test_empty_registry_plans_nothing(self, previous, current, errors):
        assert plan(previous, current, errors, HookRegistry.empty()) == []

    def test_first_success_plan(self, full_registry: HookRegistry):
        planned = plan(None, Outcome.success(), None, full_registry)
        assert [p.slot for p in planned] == [
            HookSlot.ON_SUCCESS,
            HookSlot.ON_SUCCESS_ASYNC,
            HookSlot.ON_FIRST_SUCCESS,
            HookSlot.ON_FIRST_SUCCESS_ASYNC,
            HookSlot.ON_COMPLETED,
            HookSlot.ON_COMPLETED_ASYNC,
        ]

    def test_repeated_success_plan(self, full_registry: HookRegistry):
        categories = _categories(plan(SUCCEEDED, Outcome.success(), None, full_registry))
        assert categories == {HookCategory.ON_SUCCESS, HookCategory.ON_COMPLETED}

    def test_success_to_failure_plan(self, full_registry: HookRegistry):
        categories = _categories(plan(SUCCEEDED, Outcome.failure(), None, full_registry))
        assert categories == {
            HookCategory.ON_FAILURE,
            HookCategory.ON_FIRST_FAILURE,
            HookCategory.ON_COMPLETED,
        }

    @pytest.mark.parametrize("current", [Outcome.success(), Outcome.failure()])
    def test_errored_plan(self, full_registry: HookRegistry, current: Outcome):
        planned = plan(FAILED, current, [RuntimeError("boom")], full_registry)
        assert [p.slot for p in planned] == [
            HookSlot.ON_ERROR,
            HookSlot.ON_ERROR_ASYNC,
            HookSlot.ON_FIRST_ERROR,
            HookSlot.ON_FIRST_ERROR_ASYNC,
        ]

    def test_repeated_error_plan(self, full_registry: HookRegistry):
        planned = plan(ERRORED, Outcome.success(), [RuntimeError("boom")], full_registry)
        assert _categories(planned) == {HookCategory.ON_ERROR}

    def test_sync_hooks_precede_async_within_category(self, make_hook):
        registry = (
            HookRegistry.create()
            .on_success_async(make_hook("a1", HookMode.ASYNC))
            .on_success(make_hook("s1"))
            .on_success_async(make_hook("a2", HookMode.ASYNC))
            .on_success(make_hook("s2"))
            .build()
        )
        planned = plan(SUCCEEDED, Outcome.success(), None, registry)
        assert [p.hook.name for p in planned] == ["s1", "s2", "a1", "a2"]
        assert [p.mode for p in planned] == [
            HookMode.SYNC, HookMode.SYNC, HookMode.ASYNC, HookMode.ASYNC,
        ]

    def test_only_populated_slots_appear(self):
        registry = HookRegistry.create().on_completed(Hook(lambda p: None, key="c")).build()
        planned = plan(None, Outcome.failure(), None, registry)
        assert [p.slot for p in planned] == [HookSlot.ON_COMPLETED]

    def test_plan_does_not_mutate_registry(self, full_registry: HookRegistry):
        before = dict(full_registry.slots())
        plan(None, Outcome.success(), None, full_registry)
        assert dict(full_registry.slots()) == before

    def test_equivalent_registries_plan_equally(self):
        def hook(payload):
            return None

        a = HookRegistry.create().on_success(hook).on_first_failure(hook).build()
        b = HookRegistry.create().on_success(hook).on_first_failure(hook).build()
        for previous in _PREVIOUS:
            for current in (Outcome.success(), Outcome.failure()):
                for errors in (None, [ValueError("e")]):
                    assert plan(previous, current, errors, a) == plan(
                        previous, current, errors, b
                    )
