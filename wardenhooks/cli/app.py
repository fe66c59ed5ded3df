"""Main Typer application — inspect the hook transition rules.

Entry point: ``wardenhooks`` (configured via pyproject.toml scripts).

Commands: rules, plan, simulate.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from wardenhooks.config import config
from wardenhooks.core.dispatcher import HookDispatcher
from wardenhooks.core.history import ExecutionHistory
from wardenhooks.core.registry import HookRegistry
from wardenhooks.models.hooks import Hook, HookMode, HookSlot
from wardenhooks.models.outcomes import ExecutionState, Outcome
from wardenhooks.monitor.renderer import HookRenderer

console = Console()

app = typer.Typer(
    name="wardenhooks",
    help="Inspect which watcher hooks fire for an outcome transition.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

_NO_PREVIOUS = "none"


def _parse_state(value: str, *, allow_none: bool = False) -> ExecutionState | None:
    value = value.strip().lower()
    if allow_none and value == _NO_PREVIOUS:
        return None
    try:
        return ExecutionState(value)
    except ValueError:
        choices = [s.value for s in ExecutionState]
        if allow_none:
            choices.insert(0, _NO_PREVIOUS)
        raise typer.BadParameter(
            f"{value!r} is not one of: {', '.join(choices)}"
        ) from None


@app.callback()
def main_callback() -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(name="rules", help="Show the full transition rule table.")
def rules_cmd() -> None:
    HookRenderer(console=console).print_rules()


@app.command(name="plan", help="Show the categories fired by one transition.")
def plan_cmd(
    previous: str = typer.Option(
        _NO_PREVIOUS,
        "--previous",
        "-p",
        help="State of the previous cycle: none, succeeded, failed or errored.",
    ),
    current: str = typer.Option(
        ...,
        "--current",
        "-c",
        help="State of the current cycle: succeeded, failed or errored.",
    ),
) -> None:
    """Print the hook categories selected for PREVIOUS -> CURRENT."""
    previous_state = _parse_state(previous, allow_none=True)
    current_state = _parse_state(current)
    HookRenderer(console=console).print_transition(previous_state, current_state)


@app.command(name="simulate", help="Dispatch a sequence of cycles against demo hooks.")
def simulate_cmd(
    states: list[str] = typer.Argument(
        ...,
        help="Cycle states in order, e.g. succeeded failed failed errored succeeded.",
    ),
    watcher: str = typer.Option("demo-watcher", "--watcher", "-w", help="Watcher name."),
) -> None:
    """Run each state through a dispatcher with one echo hook per slot."""
    parsed = [_parse_state(s) for s in states]

    builder = HookRegistry.create()
    for slot in HookSlot:
        builder.register(slot, _echo_hook(slot))
    registry = builder.build()

    dispatcher = HookDispatcher(ExecutionHistory(max_records=max(len(parsed), 1)))
    renderer = HookRenderer(console=console)
    for state in parsed:
        if state == ExecutionState.ERRORED:
            report = dispatcher.run(
                watcher, registry, Outcome.failure(), [RuntimeError("simulated error")]
            )
        else:
            outcome = Outcome(succeeded=state == ExecutionState.SUCCEEDED)
            report = dispatcher.run(watcher, registry, outcome)
        renderer.print_report(report)


def _echo_hook(slot: HookSlot) -> Hook:
    if slot.mode == HookMode.ASYNC:
        async def callback(payload: tuple) -> None:
            return None
    else:
        def callback(payload: tuple) -> None:
            return None
    return Hook(callback, key=slot.value, name=slot.value)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
