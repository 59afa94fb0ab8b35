"""Binding tables reused across the sample machines."""

from __future__ import annotations

from pushgoals.bindings.table import BindingTable, bind_default, bind_when, disposal_rules
from pushgoals.goals import (
    AutofixGoal,
    CodeInspectionGoal,
    DeleteRepositoryGoal,
    ExplainDeploymentFreezeGoal,
    ProductionUndeploymentGoal,
    PushReactionGoal,
    ReviewGoal,
    StagingUndeploymentGoal,
)
from pushgoals.machines.implementations import (
    AUTOFIX,
    CODE_INSPECTION,
    DELETE_REPOSITORY,
    DOCKER_IMAGE,
    ENDPOINT_200_CHECK,
    PUSH_REACTIONS,
    REVIEW,
    STORE_ARTIFACT,
    cloud_foundry_undeploy,
    explain_freeze,
)
from pushgoals.models.goal import GoalCategory
from pushgoals.predicates.builtin import HasDockerfile


def check_bindings(*, with_push_reactions: bool = False) -> BindingTable:
    rules = [
        bind_default(REVIEW, goals=[ReviewGoal], means="reviewers"),
        bind_default(CODE_INSPECTION, goals=[CodeInspectionGoal], means="inspections"),
        bind_default(AUTOFIX, goals=[AutofixGoal], means="autofixes"),
    ]
    if with_push_reactions:
        rules.append(bind_default(PUSH_REACTIONS, goals=[PushReactionGoal], means="push reactions"))
    return BindingTable(GoalCategory.INSPECTION, *rules)


def artifact_bindings() -> BindingTable:
    return BindingTable(
        GoalCategory.ARTIFACT,
        bind_when(HasDockerfile, use=DOCKER_IMAGE, means="Docker image"),
        bind_default(STORE_ARTIFACT, means="artifact store"),
    )


def verification_bindings() -> BindingTable:
    return BindingTable(
        GoalCategory.VERIFY,
        bind_default(ENDPOINT_200_CHECK, means="look for 200 on endpoint root"),
    )


def message_bindings() -> BindingTable:
    return BindingTable(
        GoalCategory.MESSAGE,
        bind_default(explain_freeze, goals=[ExplainDeploymentFreezeGoal], means="freeze message"),
    )


def undeploy_bindings() -> BindingTable:
    return disposal_rules(
        bind_default(
            cloud_foundry_undeploy("staging"),
            goals=[StagingUndeploymentGoal],
            means="undeploy from staging space",
        ),
        bind_default(
            cloud_foundry_undeploy("production"),
            goals=[ProductionUndeploymentGoal],
            means="undeploy from production space",
        ),
        bind_default(DELETE_REPOSITORY, goals=[DeleteRepositoryGoal], means="delete repository"),
    )
