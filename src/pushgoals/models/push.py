"""Push event domain models.

PushContext is the immutable snapshot of one incoming push. It is built once
per event by the caller and handed to the engine by reference; push tests
read it but never mutate it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushgoals.freeze import DeploymentStatusStore
    from pushgoals.protocols import ProjectContent


@dataclass(frozen=True)
class RepoRef:
    """Identity of the pushed repository."""

    owner: str
    name: str
    url: str | None = None
    default_branch: str = "main"
    private: bool = False

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, slug: str, **kwargs) -> RepoRef:
        """Parse an ``owner/name`` slug."""
        owner, sep, name = slug.partition("/")
        if not sep or not owner or not name:
            raise ValueError(f"Repository must be 'owner/name', got {slug!r}")
        return cls(owner=owner, name=name, **kwargs)


@dataclass(frozen=True)
class DeploymentStatus:
    """Snapshot of shared deployment state, taken at resolution start."""

    frozen: bool = False
    freeze_reason: str | None = None
    deploy_enabled: bool = True


@dataclass(frozen=True)
class PushContext:
    """Immutable snapshot of a push event.

    Attributes:
        repo: Repository identity.
        branch: Branch that received the push.
        sha: Head commit SHA after the push.
        project: Read-only accessor for project content.
        is_default_branch: Whether ``branch`` is the repository default branch.
        message: Head commit message.
        author: Login of the head commit author, if known.
        files_changed: Paths changed by the push, or None when unknown.
        deployment: Deployment status snapshot (freeze, deploy enablement).
    """

    repo: RepoRef
    branch: str
    sha: str
    project: ProjectContent
    is_default_branch: bool = False
    message: str = ""
    author: str | None = None
    files_changed: frozenset[str] | None = None
    deployment: DeploymentStatus = field(default_factory=DeploymentStatus)

    def __post_init__(self) -> None:
        if self.files_changed is not None and not isinstance(
            self.files_changed, frozenset
        ):
            object.__setattr__(self, "files_changed", frozenset(self.files_changed))

    @classmethod
    def create(
        cls,
        repo: RepoRef,
        branch: str,
        sha: str,
        project: ProjectContent,
        *,
        message: str = "",
        author: str | None = None,
        files_changed: Iterable[str] | None = None,
        status_store: DeploymentStatusStore | None = None,
        deployment: DeploymentStatus | None = None,
    ) -> PushContext:
        """Build a context, deriving the default-branch flag from *repo*.

        If *status_store* is given, its state is captured as the deployment
        snapshot; later changes to the store do not affect this context.
        """
        if deployment is None:
            deployment = (
                status_store.snapshot(repo) if status_store is not None
                else DeploymentStatus()
            )
        return cls(
            repo=repo,
            branch=branch,
            sha=sha,
            project=project,
            is_default_branch=branch == repo.default_branch,
            message=message,
            author=author,
            files_changed=frozenset(files_changed) if files_changed is not None else None,
            deployment=deployment,
        )

    @property
    def short_sha(self) -> str:
        return self.sha[:7]
