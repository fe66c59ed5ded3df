"""wardenhooks terminal output.

Modules
-------
renderer
    ``HookRenderer`` turns the transition rules and ``DispatchReport``
    records into Rich renderables.
"""
