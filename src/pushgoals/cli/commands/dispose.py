"""pushgoals dispose -- resolve the goals that retire a repository."""

from __future__ import annotations

import asyncio

import click

from pushgoals.cli import push_options


@click.command()
@push_options
@click.pass_context
def dispose(ctx: click.Context, machine: str, as_json: bool, **push: object) -> None:
    """Show undeploy and deletion goals for a repository."""
    from pushgoals.cli import _cli_session, _emit_plan, _get_engine, _push_context

    with _cli_session() as console:
        engine = _get_engine(ctx, machine)
        push_ctx = _push_context(**push)
        result = asyncio.run(engine.dispose(push_ctx, strict=False))
        _emit_plan(result, push_ctx, console, as_json)
