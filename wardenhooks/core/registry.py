"""Hook registry — immutable, deduplicated hooks for the 14 slots.

A ``HookRegistryBuilder`` accumulates hooks during setup (single writer)
and freezes them into a ``HookRegistry``.  A built registry never changes
and may be read from any number of threads or tasks.

Usage
-----
>>> registry = (
...     HookRegistry.create()
...     .on_first_failure(page_on_call)
...     .on_first_success(resolve_page)
...     .on_error_async(report_error)
...     .build()
... )
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from wardenhooks.models.hooks import Hook, HookMode, HookSlot

logger = logging.getLogger(__name__)

HookLike = Hook | Callable[..., Any]


class InvalidHookError(ValueError):
    """Raised when an absent or unusable callback is registered."""


_EMPTY: HookRegistry | None = None


class HookRegistry:
    """Frozen mapping from each ``HookSlot`` to its hooks.

    Each slot holds a tuple in insertion order with no duplicates.  Use
    ``HookRegistry.create()`` to get a builder and ``HookRegistry.empty()``
    for the shared registry with no hooks.

    Constructing one directly validates and deduplicates every slot the same
    way the builder does; a mapping with no hooks yields the empty registry.
    """

    __slots__ = ("_slots",)

    _slots: Mapping[HookSlot, tuple[Hook, ...]]

    def __new__(cls, slots: Mapping[HookSlot, Iterable[HookLike]] | None = None) -> HookRegistry:
        normalized: dict[HookSlot, tuple[Hook, ...]] = {slot: () for slot in HookSlot}
        for key, hooks in (slots or {}).items():
            slot = HookSlot(key)
            normalized[slot] = tuple(dict.fromkeys(_as_hook(slot, hook) for hook in hooks))
        if _EMPTY is not None and cls is HookRegistry and not any(normalized.values()):
            return _EMPTY
        registry = super().__new__(cls)
        registry._slots = MappingProxyType(normalized)
        return registry

    @staticmethod
    def create() -> HookRegistryBuilder:
        """Return a new builder."""
        return HookRegistryBuilder()

    @staticmethod
    def empty() -> HookRegistry:
        """Return the shared registry with no hooks in any slot."""
        return _EMPTY

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def hooks_for(self, slot: HookSlot) -> tuple[Hook, ...]:
        """Return the hooks of *slot* in their deterministic order."""
        return self._slots[slot]

    def slots(self) -> Mapping[HookSlot, tuple[Hook, ...]]:
        """Return a read-only view of all 14 slots."""
        return self._slots

    @property
    def is_empty(self) -> bool:
        return not any(self._slots.values())

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._slots.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HookRegistry):
            return NotImplemented
        return dict(self._slots) == dict(other._slots)

    def __hash__(self) -> int:
        return hash(tuple(self._slots[slot] for slot in HookSlot))

    def __repr__(self) -> str:
        populated = {
            slot.value: len(hooks) for slot, hooks in self._slots.items() if hooks
        }
        return f"HookRegistry({populated!r})"


_EMPTY = HookRegistry()


class HookRegistryBuilder:
    """Mutable accumulator of hooks, frozen with ``build()``.

    Every registration method accepts one or more callbacks (plain callables
    or ``Hook`` instances) and returns the builder for chaining.  Registering
    a hook already present in the slot is a no-op.

    ``build()`` returns the same registry when called again without new
    registrations in between.  Registering after ``build()`` produces a new
    registry on the next ``build()``; registries already handed out are not
    affected.
    """

    def __init__(self) -> None:
        # dict keys give an insertion-ordered set
        self._slots: dict[HookSlot, dict[Hook, None]] = {slot: {} for slot in HookSlot}
        self._built: HookRegistry | None = None

    def register(self, slot: HookSlot, *hooks: HookLike) -> HookRegistryBuilder:
        """Add *hooks* to *slot*.

        Raises
        ------
        InvalidHookError
            If any of *hooks* is None, not callable, or a coroutine function
            registered into a synchronous slot.  Nothing is registered in
            that case.
        """
        slot = HookSlot(slot)
        prepared = [_as_hook(slot, hook) for hook in hooks]

        bucket = self._slots[slot]
        for hook in prepared:
            if hook in bucket:
                logger.debug("Duplicate hook %s ignored for slot %s", hook.name, slot.value)
                continue
            bucket[hook] = None
            self._built = None
            logger.debug("Registered hook %s for slot %s", hook.name, slot.value)
        return self

    def build(self) -> HookRegistry:
        """Freeze the registered hooks into a ``HookRegistry``."""
        if self._built is None:
            if any(self._slots.values()):
                self._built = HookRegistry(
                    {slot: tuple(bucket) for slot, bucket in self._slots.items()}
                )
            else:
                self._built = _EMPTY
        return self._built

    # ------------------------------------------------------------------
    # Per-slot registration
    # ------------------------------------------------------------------

    def on_success(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked on every succeeded execution."""
        return self.register(HookSlot.ON_SUCCESS, *hooks)

    def on_success_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_SUCCESS_ASYNC, *hooks)

    def on_first_success(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked when an execution succeeds after a cycle that didn't."""
        return self.register(HookSlot.ON_FIRST_SUCCESS, *hooks)

    def on_first_success_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_FIRST_SUCCESS_ASYNC, *hooks)

    def on_failure(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked on every failed execution."""
        return self.register(HookSlot.ON_FAILURE, *hooks)

    def on_failure_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_FAILURE_ASYNC, *hooks)

    def on_first_failure(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked when an execution fails after a succeeded cycle."""
        return self.register(HookSlot.ON_FIRST_FAILURE, *hooks)

    def on_first_failure_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_FIRST_FAILURE_ASYNC, *hooks)

    def on_completed(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked on every execution that reached a verdict."""
        return self.register(HookSlot.ON_COMPLETED, *hooks)

    def on_completed_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_COMPLETED_ASYNC, *hooks)

    def on_error(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked on every execution that raised."""
        return self.register(HookSlot.ON_ERROR, *hooks)

    def on_error_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_ERROR_ASYNC, *hooks)

    def on_first_error(self, *hooks: HookLike) -> HookRegistryBuilder:
        """Hooks invoked when an execution raises after a cycle that didn't."""
        return self.register(HookSlot.ON_FIRST_ERROR, *hooks)

    def on_first_error_async(self, *hooks: HookLike) -> HookRegistryBuilder:
        return self.register(HookSlot.ON_FIRST_ERROR_ASYNC, *hooks)


def _as_hook(slot: HookSlot, hook: HookLike | None) -> Hook:
    if hook is None:
        raise InvalidHookError(f"Cannot register None as a {slot.value} hook")
    callback = hook.callback if isinstance(hook, Hook) else hook
    if not callable(callback):
        raise InvalidHookError(
            f"{slot.value} hook must be callable, got {type(callback).__name__}"
        )
    if not isinstance(hook, Hook):
        hook = Hook(hook)
    if slot.mode == HookMode.SYNC and inspect.iscoroutinefunction(hook.callback):
        raise InvalidHookError(
            f"Coroutine function {hook.name} cannot be a {slot.value} hook; "
            f"register it as {slot.value}_async"
        )
    return hook
