"""pushgoals machines -- list registered delivery machines."""

from __future__ import annotations

import click

from pushgoals.cli.formatting import format_machines


@click.command()
@click.pass_context
def machines(ctx: click.Context) -> None:
    """List the delivery machines that plan and dispose can use."""
    from pushgoals.cli import _cli_session, _get_engine
    from pushgoals.machines import MACHINES

    with _cli_session() as console:
        engines = [(name, _get_engine(ctx, name)) for name in sorted(MACHINES)]
        format_machines(engines, console)
