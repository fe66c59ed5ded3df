"""Execution history — the previous cycle's state for each watcher.

The history is the only mutable state the transition rules depend on.  It
is written by the dispatcher after a cycle's hooks have run and read before
the next cycle is planned.  A bounded log of ``ExecutionRecord`` entries is
kept for inspection.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from wardenhooks.models.hooks import HookCategory
from wardenhooks.models.outcomes import ExecutionState
from wardenhooks.models.reports import ExecutionRecord

logger = logging.getLogger(__name__)


class ExecutionHistory:
    """In-memory per-watcher execution state.

    Parameters
    ----------
    max_records:
        Upper bound on retained ``ExecutionRecord`` entries across all
        watchers.  Oldest entries are dropped first.
    """

    def __init__(self, max_records: int = 100) -> None:
        if max_records < 1:
            raise ValueError(f"max_records must be positive, got {max_records}")
        self._states: dict[str, ExecutionState] = {}
        self._sequences: dict[str, int] = {}
        self._records: deque[ExecutionRecord] = deque(maxlen=max_records)

    def previous(self, watcher_name: str) -> ExecutionState | None:
        """Return the last recorded state, or None before the first cycle."""
        return self._states.get(watcher_name)

    def record(
        self,
        watcher_name: str,
        state: ExecutionState,
        fired_categories: Iterable[HookCategory] = (),
    ) -> ExecutionRecord:
        """Advance *watcher_name* to *state* and log the cycle."""
        sequence = self._sequences.get(watcher_name, 0) + 1
        entry = ExecutionRecord(
            watcher_name=watcher_name,
            sequence=sequence,
            previous_state=self._states.get(watcher_name),
            state=state,
            fired_categories=tuple(fired_categories),
        )
        self._states[watcher_name] = state
        self._sequences[watcher_name] = sequence
        self._records.append(entry)

        if entry.is_transition:
            logger.info(
                "Watcher %s transitioned %s -> %s",
                watcher_name,
                entry.previous_state.value if entry.previous_state else "none",
                state.value,
            )
        return entry

    def records(self, watcher_name: str | None = None) -> list[ExecutionRecord]:
        """Return retained records, oldest first, optionally for one watcher."""
        if watcher_name is None:
            return list(self._records)
        return [r for r in self._records if r.watcher_name == watcher_name]

    def reset(self, watcher_name: str | None = None) -> None:
        """Forget one watcher (or all), so its next cycle counts as the first."""
        if watcher_name is None:
            self._states.clear()
            self._sequences.clear()
            self._records.clear()
            return
        self._states.pop(watcher_name, None)
        self._sequences.pop(watcher_name, None)
        kept = [r for r in self._records if r.watcher_name != watcher_name]
        self._records.clear()
        self._records.extend(kept)

    @property
    def watcher_names(self) -> list[str]:
        return sorted(self._states)
