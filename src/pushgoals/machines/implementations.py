"""Implementation factories shared by the sample machines.

Each factory returns an ``Implementation`` describing what an executor should
run. Factories that depend on the push take ``(goal, ctx)`` and are called by
the binding resolver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pushgoals.bindings.table import ImplementationFactory
from pushgoals.models.plan import Implementation

if TYPE_CHECKING:
    from pushgoals.models.goal import Goal
    from pushgoals.models.push import PushContext


MAVEN_BUILD = Implementation(
    "maven-build", "mvn package", {"command": ["mvn", "-B", "package"]}
)

CUSTOM_BUILD_SCRIPT = Implementation(
    "custom-build-script",
    "Run the project's own build script",
    {"command": ["sh", ".pushgoals/build.sh"]},
)

LOCAL_JAR_DEPLOY = Implementation(
    "local-executable-jar", "Run the built jar on this host", {"port_range": [8080, 8099]}
)

STORE_ARTIFACT = Implementation("store-artifact", "Upload the build artifact")

CODE_INSPECTION = Implementation("code-inspection", "Run registered inspections")

REVIEW = Implementation("review", "Run registered reviewers")

AUTOFIX = Implementation("autofix", "Apply registered autofixes")

PUSH_REACTIONS = Implementation("push-reactions", "Run push reactions")

ENDPOINT_200_CHECK = Implementation(
    "endpoint-root-get", "Expect HTTP 200 from GET on the endpoint root"
)

DELETE_REPOSITORY = Implementation("delete-repository", "Delete the repository")

DOCKER_IMAGE = Implementation(
    "docker-image", "Build and push a Docker image", {"dockerfile": "Dockerfile"}
)


def npm_build(install: str, script: str) -> Implementation:
    """Factory for an npm build running *install* then *script*."""
    return Implementation(
        "npm-build",
        f"{install} && {script}",
        {"commands": [install.split(), script.split()]},
    )


def cloud_foundry_deploy(environment: str) -> ImplementationFactory:
    """Factory binding deploy and endpoint goals to a Cloud Foundry space.

    The application name is derived from the pushed repository.
    """

    def _factory(goal: Goal, ctx: PushContext) -> Implementation:
        return Implementation(
            f"cloud-foundry-{environment}",
            f"{goal.display_name} ({ctx.repo.slug})",
            {
                "space": environment,
                "app": ctx.repo.name,
                "manifest": "manifest.yml",
                "sha": ctx.sha,
            },
        )

    return _factory


def cloud_foundry_undeploy(environment: str) -> ImplementationFactory:
    def _factory(goal: Goal, ctx: PushContext) -> Implementation:
        return Implementation(
            f"cloud-foundry-undeploy-{environment}",
            f"Remove {ctx.repo.name} from {environment}",
            {"space": environment, "app": ctx.repo.name},
        )

    return _factory


def explain_freeze(goal: Goal, ctx: PushContext) -> Implementation:
    reason = ctx.deployment.freeze_reason or "no reason given"
    return Implementation(
        "message",
        "Explain why deployment is skipped",
        {"text": f"Deployment of {ctx.repo.slug} is frozen: {reason}"},
    )
