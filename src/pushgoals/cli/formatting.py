"""Rich formatting helpers for the pushgoals CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pushgoals.models.plan import Implementation

if TYPE_CHECKING:
    from pushgoals.engine import GoalEngine
    from pushgoals.models.plan import GoalPlan, PlanEntry
    from pushgoals.models.push import PushContext


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def _implementation_text(entry: PlanEntry) -> str:
    if not entry.is_bound:
        style = "red" if entry.goal.required else "dim"
        return f"[{style}]unbound[/{style}]"
    impl = entry.implementation
    if isinstance(impl, Implementation):
        return escape(impl.name)
    return escape(repr(impl))


def format_plan(plan: GoalPlan, ctx: PushContext, console: Console) -> None:
    """Display a resolved plan as a table of goals."""
    console.print(
        f"[bold]{escape(ctx.repo.slug)}[/bold] on [green]{escape(ctx.branch)}[/green] "
        f"([yellow]{ctx.short_sha}[/yellow]): {escape(plan.label)}"
    )
    if plan.rationale:
        console.print(f"  Rules:     {escape(' > '.join(plan.rationale))}")
    if plan.overrides:
        console.print(f"  Overrides: [magenta]{escape(', '.join(plan.overrides))}[/magenta]")

    if not plan.entries:
        console.print("[dim]No goals.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Goal", style="cyan")
    table.add_column("Category")
    table.add_column("Implementation")
    table.add_column("Binding", style="dim")

    for i, entry in enumerate(plan.entries, start=1):
        name = entry.goal.name if entry.goal.required else f"{entry.goal.name} (optional)"
        table.add_row(
            str(i),
            escape(name),
            entry.goal.category.value,
            _implementation_text(entry),
            escape(entry.binding or ""),
        )
    console.print(table)


def format_unbound(plan: GoalPlan, console: Console) -> None:
    """Report required goals with no implementation."""
    names = ", ".join(goal.name for goal in plan.unbound_required)
    console.print(f"[red]Unbound required goals:[/red] {escape(names)}", highlight=False)


def format_machines(engines: list[tuple[str, GoalEngine]], console: Console) -> None:
    """Display registered machines."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Name", style="cyan")
    table.add_column("Machine")
    table.add_column("Goals", justify="right", style="green")
    table.add_column("Gates")
    table.add_column("Disposal")

    for key, engine in engines:
        table.add_row(
            key,
            escape(engine.name),
            str(len(engine.declared_goals())),
            escape(", ".join(gate.name for gate in engine.gates)) or "-",
            "yes" if engine.disposal is not None else "no",
        )
    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
