"""pushgoals plan -- resolve a push into goals and implementations."""

from __future__ import annotations

import asyncio

import click

from pushgoals.cli import push_options


@click.command()
@push_options
@click.pass_context
def plan(ctx: click.Context, machine: str, as_json: bool, **push: object) -> None:
    """Resolve a push against a machine and show the goal plan.

    Exits with status 1 if a required goal has no implementation.
    """
    from pushgoals.cli import _cli_session, _emit_plan, _get_engine, _push_context

    with _cli_session() as console:
        engine = _get_engine(ctx, machine)
        push_ctx = _push_context(**push)
        result = asyncio.run(engine.plan(push_ctx))
        _emit_plan(result, push_ctx, console, as_json)
