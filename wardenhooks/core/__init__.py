"""wardenhooks core — registry, transition evaluator, history, dispatcher.

Modules
-------
registry
    ``HookRegistryBuilder`` and the frozen ``HookRegistry``.
evaluator
    Pure transition rules: ``classify``, ``select_categories``, ``plan``.
history
    ``ExecutionHistory``, the per-watcher previous state.
dispatcher
    ``HookDispatcher``, which runs a plan and advances the history.
"""
