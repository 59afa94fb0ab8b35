"""Tests for the sample delivery machines.

Tests cover:
- Cloud Foundry machine: Maven and Node branches of the tree, build binding
  order, deploy bindings, disposal
- Additive machine: contributions merged, freeze gate swap
- Static analysis machine and the machine registry
- Implementation factories
"""

from __future__ import annotations

import pytest

from pushgoals.exceptions import ConfigurationError
from pushgoals.goals import ProductionUndeploymentGoal, StagingDeploymentGoal
from pushgoals.machines import (
    MACHINES,
    additive_cloud_foundry_machine,
    cloud_foundry_machine,
    get_machine,
    static_analysis_machine,
)
from pushgoals.machines.implementations import (
    cloud_foundry_deploy,
    cloud_foundry_undeploy,
    npm_build,
)
from pushgoals.models.config import EngineConfig
from tests.conftest import make_context

SPRING_POM = "<parent><artifactId>spring-boot-starter-parent</artifactId></parent>"


def _spring(**kwargs):
    return make_context({"pom.xml": SPRING_POM, "manifest.yml": ""}, **kwargs)


def _node(*extra, **kwargs):
    files = {"package.json": "{}", **{name: "" for name in extra}}
    return make_context(files, **kwargs)


class TestCloudFoundryMachine:
    @pytest.fixture
    def engine(self):
        return cloud_foundry_machine()

    @pytest.mark.anyio
    async def test_spring_boot_service_on_default_branch(self, engine):
        plan = await engine.resolve(_spring(changed=["src/main/java/App.java"]))
        assert plan.goal_names == [
            "review", "autofix", "build", "artifact",
            "staging-deploy", "staging-endpoint", "staging-verified",
            "production-deploy", "production-endpoint",
        ]
        assert plan.rationale == ("Maven", "Spring Boot service to deploy")
        assert plan.implementation_for("build").name == "maven-build"
        assert plan.implementation_for("staging-deploy").name == "local-executable-jar"
        production = plan.implementation_for("production-deploy")
        assert production.name == "cloud-foundry-production"
        assert production.params["app"] == "shop"

    @pytest.mark.anyio
    async def test_no_material_java_change(self, engine):
        plan = await engine.resolve(_spring(changed=["README.md"]))
        assert len(plan) == 0
        assert plan.rationale == ("Maven", "No material change to Java")

    @pytest.mark.anyio
    async def test_spring_boot_feature_branch_deploys_locally(self, engine):
        plan = await engine.resolve(_spring(branch="feature/x"))
        assert plan.goal_names == ["review", "autofix", "build", "local-deploy"]
        assert plan.implementation_for("local-deploy").name == "local-executable-jar"

    @pytest.mark.anyio
    async def test_private_repo_is_not_deployed(self, engine):
        plan = await engine.resolve(_spring(private=True))
        assert plan.rationale == ("Maven", "Spring Boot service local deploy")

    @pytest.mark.anyio
    async def test_bot_push_falls_back_to_library(self, engine):
        plan = await engine.resolve(_spring(author="pushgoals[bot]"))
        assert plan.rationale == ("Maven", "Build Java library")

    @pytest.mark.anyio
    async def test_maven_library(self, engine):
        plan = await engine.resolve(make_context({"pom.xml": "<project/>"}))
        assert plan.goal_names == ["review", "autofix", "build", "artifact"]

    @pytest.mark.anyio
    async def test_node_deploy_on_default_branch(self, engine):
        plan = await engine.resolve(
            _node("manifest.yml", "package-lock.json", changed=["index.js"])
        )
        assert plan.rationale == ("Build and deploy Node",)
        assert plan.implementation_for("build").description == "npm ci && npm run build"
        assert plan.implementation_for("staging-deploy").name == "cloud-foundry-staging"
        assert plan.is_complete

    @pytest.mark.parametrize(
        ("branch", "extra", "expected"),
        [
            ("main", ("package-lock.json",), "npm ci && npm run build"),
            ("dev", ("package-lock.json",), "npm ci && npm run compile"),
            ("main", (), "npm i && npm run build"),
            ("dev", (), "npm i && npm run compile"),
            ("dev", (".pushgoals/build.sh",), "Run the project's own build script"),
        ],
    )
    @pytest.mark.anyio
    async def test_node_build_binding_order(self, engine, branch, extra, expected):
        plan = await engine.resolve(_node(*extra, branch=branch))
        assert plan.rationale == ("Build Node",)
        assert plan.implementation_for("build").description == expected

    @pytest.mark.anyio
    async def test_node_docker_build(self, engine):
        plan = await engine.resolve(_node("Dockerfile", branch="dev"))
        assert plan.rationale == ("Docker build Node",)
        assert plan.implementation_for("artifact").name == "docker-image"

    @pytest.mark.anyio
    async def test_unknown_project_has_no_goals(self, engine):
        plan = await engine.resolve(make_context(["README.md"]))
        assert len(plan) == 0

    @pytest.mark.anyio
    async def test_disposal(self, engine):
        undeploy = await engine.dispose(_node("manifest.yml"))
        assert undeploy.goal_names == ["staging-undeploy", "production-undeploy"]
        assert undeploy.implementation_for("staging-undeploy").params["space"] == "staging"

        delete = await engine.dispose(make_context(["README.md"]))
        assert delete.goal_names[-1] == "delete-repository"
        assert delete.is_complete

    @pytest.mark.anyio
    async def test_serial_and_speculative_agree(self):
        ctx = _spring(changed=["pom.xml"])
        serial = await cloud_foundry_machine(EngineConfig(speculative=False)).resolve(ctx)
        speculative = await cloud_foundry_machine(EngineConfig()).resolve(ctx)
        assert serial == speculative


class TestAdditiveMachine:
    @pytest.fixture
    def engine(self):
        return additive_cloud_foundry_machine()

    @pytest.mark.anyio
    async def test_contributions_merge(self, engine):
        plan = await engine.resolve(_node("manifest.yml"))
        assert plan.goal_names == [
            "code-inspection", "push-reaction", "autofix", "build", "artifact",
            "staging-deploy", "staging-endpoint", "staging-verified",
            "production-deploy", "production-endpoint",
        ]
        assert plan.label == "Checks + Build + Staging deployment + Production deployment"
        assert plan.is_complete

    @pytest.mark.anyio
    async def test_feature_branch_only_checks_and_build(self, engine):
        plan = await engine.resolve(_node("manifest.yml", branch="feature/x"))
        assert plan.goal_names == ["code-inspection", "push-reaction", "autofix", "build"]

    @pytest.mark.anyio
    async def test_freeze_swaps_deployment(self, engine):
        plan = await engine.resolve(_node("manifest.yml", frozen=True))
        assert plan.goal_names == [
            "code-inspection", "push-reaction", "autofix", "build", "artifact",
            "explain-deployment-freeze",
        ]
        assert plan.overrides == ("deployment-freeze",)
        message = plan.implementation_for("explain-deployment-freeze")
        assert "release week" in message.params["text"]


class TestStaticAnalysisMachine:
    @pytest.mark.anyio
    async def test_java_change_is_reviewed(self):
        plan = await static_analysis_machine().resolve(
            make_context(["pom.xml"], changed=["src/App.java"])
        )
        assert plan.goal_names == ["review"]

    @pytest.mark.anyio
    async def test_other_projects_ignored(self):
        plan = await static_analysis_machine().resolve(make_context(["package.json"]))
        assert len(plan) == 0


class TestRegistry:
    @pytest.mark.parametrize("name", sorted(MACHINES))
    def test_every_machine_builds(self, name):
        engine = get_machine(name, EngineConfig(max_concurrency=2))
        assert engine.config.max_concurrency == 2
        assert engine.declared_goals()

    def test_unknown_machine(self):
        with pytest.raises(ConfigurationError, match="Unknown machine"):
            get_machine("kubernetes")


class TestImplementations:
    def test_npm_build_splits_commands(self):
        impl = npm_build("npm ci", "npm run build")
        assert impl.name == "npm-build"
        assert impl.description == "npm ci && npm run build"
        assert impl.params["commands"] == [["npm", "ci"], ["npm", "run", "build"]]

    def test_cloud_foundry_factories_use_pushed_repo(self):
        ctx = make_context()
        deploy = cloud_foundry_deploy("staging")(StagingDeploymentGoal, ctx)
        assert deploy.name == "cloud-foundry-staging"
        assert deploy.params["app"] == "shop"
        assert deploy.params["sha"] == ctx.sha
        undeploy = cloud_foundry_undeploy("production")(ProductionUndeploymentGoal, ctx)
        assert undeploy.name == "cloud-foundry-undeploy-production"
        assert undeploy.params == {"space": "production", "app": "shop"}
