"""wardenhooks CLI — Typer-based diagnostics for the transition rules.

All output uses Rich for formatted terminal display.
"""
