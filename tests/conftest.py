"""Shared test fixtures for pushgoals.

Provides the anyio backend, push context builders and push tests that
record when they run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest

from pushgoals.content.memory import InMemoryProject
from pushgoals.models.config import EngineConfig
from pushgoals.models.push import DeploymentStatus, PushContext, RepoRef
from pushgoals.predicates.protocols import PushTest


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_context(
    files: Iterable[str] | dict[str, str] = (),
    *,
    branch: str = "main",
    default_branch: str = "main",
    repo: str = "acme/shop",
    sha: str = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678",
    changed: Iterable[str] | None = None,
    author: str | None = None,
    private: bool = False,
    frozen: bool = False,
    deploy_enabled: bool = True,
    project=None,
) -> PushContext:
    """Build a PushContext over an in-memory project."""
    if project is None:
        if isinstance(files, dict):
            project = InMemoryProject(files)
        else:
            project = InMemoryProject.with_files(*files)
    return PushContext.create(
        RepoRef.parse(repo, default_branch=default_branch, private=private),
        branch,
        sha,
        project,
        author=author,
        files_changed=changed,
        deployment=DeploymentStatus(
            frozen=frozen,
            freeze_reason="release week" if frozen else None,
            deploy_enabled=deploy_enabled,
        ),
    )


def serial_config(**overrides) -> EngineConfig:
    """Config with speculative evaluation disabled."""
    return EngineConfig(speculative=False, **overrides)


class Recorder(PushTest):
    """Push test returning a fixed result and logging each evaluation.

    Attributes:
        calls: Shared list that receives the test name on every evaluation.
        finished: Names of evaluations that ran to completion.
    """

    def __init__(
        self,
        name: str,
        result: bool = True,
        *,
        calls: list[str] | None = None,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self.result = result
        self.calls = calls if calls is not None else []
        self.finished: list[str] = []
        self.cancelled = False
        self.delay = delay
        self.error = error

    @property
    def name(self) -> str:
        return self._name

    async def evaluate(self, ctx: PushContext) -> bool:
        self.calls.append(self._name)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        self.finished.append(self._name)
        return self.result
