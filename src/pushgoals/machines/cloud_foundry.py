"""Cloud Foundry delivery machine: an exclusive decision tree.

Maven projects are handled by a nested tree; Node projects by the top-level
rules that follow it. The first matching rule decides the goals.
"""

from __future__ import annotations

from pushgoals.bindings.table import bind_default, bind_when, build_rules, deploy_rules
from pushgoals.engine import GoalEngine
from pushgoals.goals import (
    ArtifactGoal,
    AutofixGoal,
    BuildGoal,
    HttpServiceGoals,
    LibraryGoals,
    LocalDeploymentGoal,
    LocalDeploymentGoals,
    NoGoals,
    ProductionDeploymentGoal,
    ProductionEndpointGoal,
    RepositoryDeletionGoals,
    ReviewGoal,
    StagingDeploymentGoal,
    StagingDeploymentGoals,
    StagingEndpointGoal,
    UndeployEverywhereGoals,
)
from pushgoals.machines.implementations import (
    CUSTOM_BUILD_SCRIPT,
    LOCAL_JAR_DEPLOY,
    MAVEN_BUILD,
    cloud_foundry_deploy,
    npm_build,
)
from pushgoals.machines.tables import (
    artifact_bindings,
    check_bindings,
    undeploy_bindings,
    verification_bindings,
)
from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import GoalSet
from pushgoals.predicates.builtin import (
    AnyPush,
    HasCloudFoundryManifest,
    HasCustomBuildScript,
    HasDockerfile,
    HasPackageLock,
    IsDeployEnabled,
    IsMaven,
    IsNode,
    IsSpringBoot,
    MaterialChangeToJavaRepo,
    MaterialChangeToNodeRepo,
    ToDefaultBranch,
    ToPublicRepo,
    from_author,
)
from pushgoals.predicates.combinators import not_
from pushgoals.rules.models import given, on_any_push, when_push
from pushgoals.rules.tree import DecisionTree

FromBot = from_author("pushgoals[bot]")

NpmBuildGoals = GoalSet.of("npm build", ReviewGoal, AutofixGoal, BuildGoal)

NpmDockerGoals = GoalSet.of("npm docker", ReviewGoal, AutofixGoal, BuildGoal, ArtifactGoal)

NpmDeployGoals = GoalSet(
    "npm deploy", (ReviewGoal, AutofixGoal, BuildGoal, *StagingDeploymentGoals)
)


def goal_tree() -> DecisionTree:
    return DecisionTree(
        given(
            IsMaven,
            means="Maven",
            rules=[
                when_push(
                    IsSpringBoot,
                    not_(MaterialChangeToJavaRepo),
                    goals=NoGoals,
                    means="No material change to Java",
                ),
                when_push(
                    ToDefaultBranch,
                    IsSpringBoot,
                    HasCloudFoundryManifest,
                    ToPublicRepo,
                    not_(FromBot),
                    IsDeployEnabled,
                    goals=HttpServiceGoals,
                    means="Spring Boot service to deploy",
                ),
                when_push(
                    IsSpringBoot,
                    not_(FromBot),
                    goals=LocalDeploymentGoals,
                    means="Spring Boot service local deploy",
                ),
                on_any_push(LibraryGoals, means="Build Java library"),
            ],
        ),
        when_push(
            IsNode,
            not_(MaterialChangeToNodeRepo),
            goals=NoGoals,
            means="No material change to Node",
        ),
        when_push(
            IsNode,
            HasCloudFoundryManifest,
            IsDeployEnabled,
            ToDefaultBranch,
            goals=NpmDeployGoals,
            means="Build and deploy Node",
        ),
        when_push(IsNode, HasDockerfile, goals=NpmDockerGoals, means="Docker build Node"),
        when_push(IsNode, not_(HasDockerfile), goals=NpmBuildGoals, means="Build Node"),
        name="cloud foundry goals",
    )


def build_bindings():
    return build_rules(
        bind_when(HasCustomBuildScript, use=CUSTOM_BUILD_SCRIPT, means="Custom build script"),
        bind_when(
            IsNode,
            ToDefaultBranch,
            HasPackageLock,
            use=npm_build("npm ci", "npm run build"),
            means="npm run build",
        ),
        bind_when(
            IsNode,
            HasPackageLock,
            use=npm_build("npm ci", "npm run compile"),
            means="npm run compile",
        ),
        bind_when(
            IsNode,
            ToDefaultBranch,
            use=npm_build("npm i", "npm run build"),
            means="npm run build - no package lock",
        ),
        bind_when(
            IsNode,
            use=npm_build("npm i", "npm run compile"),
            means="npm run compile - no package lock",
        ),
        bind_default(MAVEN_BUILD, means="Maven build"),
    )


def deploy_bindings():
    return deploy_rules(
        bind_when(
            IsMaven,
            use=LOCAL_JAR_DEPLOY,
            goals=[StagingDeploymentGoal, StagingEndpointGoal, LocalDeploymentGoal],
            means="Maven staging runs the executable jar",
        ),
        bind_when(
            IsMaven,
            use=cloud_foundry_deploy("production"),
            goals=[ProductionDeploymentGoal, ProductionEndpointGoal],
            means="Maven production on Cloud Foundry",
        ),
        bind_when(
            IsNode,
            use=cloud_foundry_deploy("staging"),
            goals=[StagingDeploymentGoal, StagingEndpointGoal],
            means="Node staging on Cloud Foundry",
        ),
    )


def disposal_tree() -> DecisionTree:
    return DecisionTree(
        when_push(
            IsMaven,
            IsSpringBoot,
            HasCloudFoundryManifest,
            goals=UndeployEverywhereGoals,
            means="Java project to undeploy from PCF",
        ),
        when_push(
            IsNode,
            HasCloudFoundryManifest,
            goals=UndeployEverywhereGoals,
            means="Node project to undeploy from PCF",
        ),
        when_push(AnyPush, goals=RepositoryDeletionGoals, means="We can always delete the repo"),
        name="cloud foundry disposal",
    )


def cloud_foundry_machine(config: EngineConfig | None = None) -> GoalEngine:
    """Build the Cloud Foundry machine."""
    return GoalEngine(
        goal_tree(),
        name="Cloud Foundry software delivery machine",
        bindings=[
            build_bindings(),
            deploy_bindings(),
            check_bindings(),
            artifact_bindings(),
            verification_bindings(),
            undeploy_bindings(),
        ],
        disposal=disposal_tree(),
        config=config,
    )
