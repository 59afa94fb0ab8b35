"""Deployment status store and the deployment freeze gate.

The store is configuration-time state shared by the process. Resolution
never reads it directly: ``PushContext.create`` captures a snapshot, and the
freeze and deploy-enablement push tests read only that snapshot.
"""

from __future__ import annotations

import logging
import threading

from pushgoals.gates import OverrideGate
from pushgoals.goals import ExplainDeploymentFreezeGoal, FrozenDeploymentGoals
from pushgoals.models.goal import GoalSet
from pushgoals.models.push import DeploymentStatus, RepoRef
from pushgoals.predicates.builtin import IsDeploymentFrozen
from pushgoals.predicates.protocols import PushTest

logger = logging.getLogger(__name__)


class DeploymentStatusStore:
    """Thread-safe in-memory store for freeze state and deploy enablement.

    Deploy is enabled for every repository unless explicitly disabled.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frozen = False
        self._reason: str | None = None
        self._disabled: set[str] = set()

    # ------------------------------------------------------------------
    # Freeze
    # ------------------------------------------------------------------

    def freeze(self, reason: str | None = None) -> None:
        with self._lock:
            self._frozen = True
            self._reason = reason
        logger.info("Deployment frozen: %s", reason or "no reason given")

    def unfreeze(self) -> None:
        with self._lock:
            self._frozen = False
            self._reason = None
        logger.info("Deployment unfrozen")

    @property
    def is_frozen(self) -> bool:
        with self._lock:
            return self._frozen

    # ------------------------------------------------------------------
    # Deploy enablement
    # ------------------------------------------------------------------

    def enable_deploy(self, repo: RepoRef) -> None:
        with self._lock:
            self._disabled.discard(repo.slug)

    def disable_deploy(self, repo: RepoRef) -> None:
        with self._lock:
            self._disabled.add(repo.slug)

    def is_deploy_enabled(self, repo: RepoRef) -> bool:
        with self._lock:
            return repo.slug not in self._disabled

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self, repo: RepoRef) -> DeploymentStatus:
        """Capture the current state for *repo* as an immutable snapshot."""
        with self._lock:
            return DeploymentStatus(
                frozen=self._frozen,
                freeze_reason=self._reason,
                deploy_enabled=repo.slug not in self._disabled,
            )


def deployment_freeze_gate(
    *,
    governs: GoalSet = FrozenDeploymentGoals,
    replacement: GoalSet | None = None,
    predicate: PushTest = IsDeploymentFrozen,
    name: str = "deployment-freeze",
) -> OverrideGate:
    """Gate that swaps deployment goals for an explanation while frozen."""
    if replacement is None:
        replacement = GoalSet.of("Deployment frozen", ExplainDeploymentFreezeGoal)
    return OverrideGate.for_goals(name, predicate, governs, replacement)
