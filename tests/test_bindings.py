"""Tests for binding tables and binding resolution.

Tests cover:
- First matching rule supplies the implementation
- Goal filters restrict which goals a rule may bind
- Factories receive the goal and push context; their failures are BindingErrors
- Goals without a table or matching rule stay UNBOUND
- Binding never depends on the rule that selected the goal
"""

from __future__ import annotations

import pytest

from pushgoals.bindings import (
    BindingTable,
    bind_default,
    bind_goal,
    bind_goals,
    bind_when,
    build_rules,
    deploy_rules,
)
from pushgoals.exceptions import BindingError, ConfigurationError, PredicateEvaluationError
from pushgoals.goals import BuildGoal, StagingDeploymentGoal, StagingEndpointGoal
from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import Goal, GoalCategory, GoalSet
from pushgoals.models.plan import UNBOUND, Implementation
from pushgoals.predicates.builtin import IsNode
from pushgoals.predicates.evaluation import Evaluation
from tests.conftest import Recorder, make_context

MAVEN = Implementation("maven-build")
NPM = Implementation("npm-build")


async def _bind(goal, table, ctx=None):
    async with Evaluation(ctx or make_context(), EngineConfig()) as ev:
        return await bind_goal(goal, table, ev)


class TestBindGoal:
    @pytest.mark.anyio
    async def test_first_matching_rule_wins(self):
        table = build_rules(
            bind_when(Recorder("no", False), use=Implementation("never")),
            bind_when(IsNode, use=NPM, means="npm"),
            bind_default(MAVEN),
        )
        entry = await _bind(BuildGoal, table, make_context(["package.json"]))
        assert entry.implementation is NPM
        assert entry.binding == "npm"
        assert entry.is_bound

    @pytest.mark.anyio
    async def test_default_rule(self):
        entry = await _bind(BuildGoal, build_rules(bind_when(IsNode, use=NPM), bind_default(MAVEN)))
        assert entry.implementation is MAVEN
        assert entry.binding == "default"

    @pytest.mark.anyio
    async def test_no_match_is_unbound(self):
        entry = await _bind(BuildGoal, build_rules(bind_when(IsNode, use=NPM)))
        assert entry.implementation is UNBOUND
        assert not entry.is_bound

    @pytest.mark.anyio
    async def test_no_table_is_unbound(self):
        assert (await _bind(BuildGoal, None)).implementation is UNBOUND

    @pytest.mark.anyio
    async def test_goal_filter(self):
        staging = Implementation("staging")
        endpoint = Implementation("endpoint")
        table = deploy_rules(
            bind_default(staging, goals=[StagingDeploymentGoal]),
            bind_default(endpoint, goals=["staging-endpoint"]),
        )
        assert (await _bind(StagingDeploymentGoal, table)).implementation is staging
        assert (await _bind(StagingEndpointGoal, table)).implementation is endpoint
        assert (await _bind(Goal("other", GoalCategory.DEPLOY), table)).implementation is UNBOUND

    @pytest.mark.anyio
    async def test_factory_receives_goal_and_context(self):
        def factory(goal, ctx):
            return Implementation(f"{goal.name}@{ctx.branch}")

        entry = await _bind(BuildGoal, build_rules(bind_default(factory)), make_context(branch="dev"))
        assert entry.implementation.name == "build@dev"

    @pytest.mark.anyio
    async def test_factory_failure_is_binding_error(self):
        def factory(goal, ctx):
            raise KeyError("no credentials")

        with pytest.raises(BindingError) as exc_info:
            await _bind(BuildGoal, build_rules(bind_default(factory, means="cf")))
        err = exc_info.value
        assert err.goal_name == "build"
        assert err.rule_name == "cf"
        assert isinstance(err.cause, KeyError)

    @pytest.mark.anyio
    async def test_predicate_failure_names_goal(self):
        table = build_rules(bind_when(Recorder("bad", error=OSError("x")), use=MAVEN, means="m"))
        with pytest.raises(PredicateEvaluationError) as exc_info:
            await _bind(BuildGoal, table)
        assert exc_info.value.rule_name == "m (binding 'build')"


class TestBindGoals:
    @pytest.mark.anyio
    async def test_binds_in_goal_order_by_category(self):
        deploy = Implementation("deploy")
        tables = {
            GoalCategory.BUILD: build_rules(bind_default(MAVEN)),
            GoalCategory.DEPLOY: deploy_rules(bind_default(deploy)),
        }
        goals = GoalSet.of("svc", BuildGoal, StagingDeploymentGoal, Goal("x", GoalCategory.VERIFY))
        async with Evaluation(make_context(), EngineConfig()) as ev:
            entries = await bind_goals(goals, tables, ev)
        assert [e.goal.name for e in entries] == ["build", "staging-deploy", "x"]
        assert [e.implementation for e in entries] == [MAVEN, deploy, UNBOUND]

    @pytest.mark.anyio
    async def test_shared_predicate_evaluated_once(self):
        calls: list[str] = []
        shared = Recorder("shared", calls=calls)
        table = deploy_rules(bind_when(shared, use=Implementation("d")))
        goals = GoalSet.of("d", StagingDeploymentGoal, StagingEndpointGoal)
        async with Evaluation(make_context(), EngineConfig()) as ev:
            await bind_goals(goals, {GoalCategory.DEPLOY: table}, ev)
        assert calls == ["shared"]


class TestBindingTable:
    def test_rejects_non_rules(self):
        with pytest.raises(ConfigurationError):
            BindingTable(GoalCategory.BUILD, MAVEN)

    def test_bind_when_needs_a_test(self):
        with pytest.raises(ValueError):
            bind_when(use=MAVEN)

    def test_candidates_respect_goal_filter(self):
        table = deploy_rules(
            bind_default(MAVEN, goals=[StagingDeploymentGoal]),
            bind_default(NPM),
        )
        assert len(table.candidates(StagingDeploymentGoal)) == 2
        assert len(table.candidates(StagingEndpointGoal)) == 1
