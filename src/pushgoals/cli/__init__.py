"""pushgoals CLI -- resolve a push against a sample delivery machine.

This module is NEVER imported from pushgoals/__init__.py.
It is only loaded via the ``pushgoals`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install pushgoals[cli]"
    ) from None

from pushgoals.cli.formatting import format_error, format_plan, format_unbound, get_console

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from rich.console import Console

    from pushgoals.engine import GoalEngine
    from pushgoals.models.plan import GoalPlan
    from pushgoals.models.push import PushContext


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="PUSHGOALS_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for engine diagnostics.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds a push test may take (default: PUSHGOALS_PREDICATE_TIMEOUT or 30).",
)
@click.option(
    "--sequential",
    is_flag=True,
    default=False,
    help="Disable speculative evaluation of decision tree rules.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, timeout: float | None, sequential: bool) -> None:
    """pushgoals: decide which delivery goals a push should run."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    overrides: dict = {}
    if timeout is not None:
        overrides["predicate_timeout"] = timeout
    if sequential:
        overrides["speculative"] = False
    ctx.ensure_object(dict)
    ctx.obj["config_overrides"] = overrides


def _get_engine(ctx: click.Context, machine: str) -> GoalEngine:
    """Build the named machine with config from the environment and options."""
    from pushgoals.machines import get_machine
    from pushgoals.models.config import EngineConfig

    config = EngineConfig.from_env(**ctx.obj.get("config_overrides", {}))
    return get_machine(machine, config)


@contextmanager
def _cli_session() -> Iterator[Console]:
    """Yield a console and turn any exception into a formatted CLI error."""
    console = get_console()
    try:
        yield console
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


def push_options(fn: Callable) -> Callable:
    """Options shared by commands that describe a push."""
    options = [
        click.option("--machine", "-m", default="cloud-foundry", show_default=True,
                     help="Registered machine name (see `pushgoals machines`)."),
        click.option("--repo", "repo_slug", required=True, help="Repository as owner/name."),
        click.option("--branch", "-b", default="main", show_default=True,
                     help="Branch that received the push."),
        click.option("--default-branch", default="main", show_default=True,
                     help="Default branch of the repository."),
        click.option("--sha", default="0" * 40, help="Head commit SHA."),
        click.option("--message", default="", help="Head commit message."),
        click.option("--author", default=None, help="Login of the head commit author."),
        click.option("--private", is_flag=True, default=False,
                     help="Treat the repository as private."),
        click.option("--changed", "changed", multiple=True,
                     help="Changed file path (repeatable). Omit when unknown."),
        click.option("--project-dir", type=click.Path(exists=True, file_okay=False),
                     default=".", show_default=True, help="Local checkout to inspect."),
        click.option("--frozen", is_flag=True, default=False, help="Freeze deployment."),
        click.option("--freeze-reason", default=None, help="Reason shown while frozen."),
        click.option("--json", "as_json", is_flag=True, default=False,
                     help="Print the plan as JSON."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _push_context(
    *,
    repo_slug: str,
    branch: str,
    default_branch: str,
    sha: str,
    message: str,
    author: str | None,
    private: bool,
    changed: tuple[str, ...],
    project_dir: str,
    frozen: bool,
    freeze_reason: str | None,
) -> PushContext:
    """Build a PushContext from command-line options."""
    from pushgoals.content.local import LocalProject
    from pushgoals.freeze import DeploymentStatusStore
    from pushgoals.models.push import PushContext, RepoRef

    repo = RepoRef.parse(repo_slug, default_branch=default_branch, private=private)
    store = DeploymentStatusStore()
    if frozen:
        store.freeze(freeze_reason)
    return PushContext.create(
        repo,
        branch,
        sha,
        LocalProject(project_dir),
        message=message,
        author=author,
        files_changed=changed or None,
        status_store=store,
    )


def _emit_plan(
    result: GoalPlan, push_ctx: PushContext, console: Console, as_json: bool
) -> None:
    """Print *result* and exit with status 1 if a required goal is unbound."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        format_plan(result, push_ctx, console)
    if not result.is_complete:
        if not as_json:
            format_unbound(result, console)
        raise SystemExit(1)


# Register subcommands after cli group is defined
from pushgoals.cli.commands.machines import machines  # noqa: E402
from pushgoals.cli.commands.plan import plan  # noqa: E402
from pushgoals.cli.commands.dispose import dispose  # noqa: E402

cli.add_command(machines)
cli.add_command(plan)
cli.add_command(dispose)
