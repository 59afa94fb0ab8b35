"""Additive Cloud Foundry machine.

Every contributor whose push test matches adds its goals. Deployment goals
are swapped for an explanation while deployment is frozen.
"""

from __future__ import annotations

from pushgoals.bindings.table import bind_default, deploy_rules
from pushgoals.engine import GoalEngine
from pushgoals.freeze import deployment_freeze_gate
from pushgoals.goals import (
    BuildGoal,
    CheckGoals,
    ProductionDeploymentGoal,
    ProductionDeploymentGoals,
    ProductionEndpointGoal,
    StagingDeploymentGoal,
    StagingDeploymentGoals,
    StagingEndpointGoal,
)
from pushgoals.machines.cloud_foundry import build_bindings, disposal_tree
from pushgoals.machines.implementations import cloud_foundry_deploy
from pushgoals.machines.tables import (
    artifact_bindings,
    check_bindings,
    message_bindings,
    undeploy_bindings,
    verification_bindings,
)
from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import GoalSet
from pushgoals.predicates.builtin import (
    HasCloudFoundryManifest,
    IsMaven,
    IsNode,
    ToDefaultBranch,
)
from pushgoals.predicates.combinators import any_of
from pushgoals.rules.contributors import ContributorSet
from pushgoals.rules.models import on_any_push, when_push

JustBuildGoals = GoalSet.of("Build", BuildGoal)


def contributors() -> ContributorSet:
    return ContributorSet(
        on_any_push(CheckGoals, means="Checks"),
        when_push(any_of(IsMaven, IsNode), goals=JustBuildGoals, means="Build"),
        when_push(
            HasCloudFoundryManifest,
            ToDefaultBranch,
            goals=StagingDeploymentGoals,
            means="Staging deployment",
        ),
        when_push(
            HasCloudFoundryManifest,
            ToDefaultBranch,
            goals=ProductionDeploymentGoals,
            means="Production deployment",
        ),
        name="additive cloud foundry goals",
    )


def deploy_bindings():
    return deploy_rules(
        bind_default(
            cloud_foundry_deploy("staging"),
            goals=[StagingDeploymentGoal, StagingEndpointGoal],
            means="Cloud Foundry staging space",
        ),
        bind_default(
            cloud_foundry_deploy("production"),
            goals=[ProductionDeploymentGoal, ProductionEndpointGoal],
            means="Cloud Foundry production space",
        ),
    )


def additive_cloud_foundry_machine(config: EngineConfig | None = None) -> GoalEngine:
    """Build the additive machine with its deployment freeze gate."""
    return GoalEngine(
        contributors(),
        name="Additive Cloud Foundry software delivery machine",
        bindings=[
            build_bindings(),
            deploy_bindings(),
            check_bindings(with_push_reactions=True),
            artifact_bindings(),
            verification_bindings(),
            message_bindings(),
            undeploy_bindings(),
        ],
        gates=[deployment_freeze_gate()],
        disposal=disposal_tree(),
        config=config,
    )
