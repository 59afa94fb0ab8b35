"""Tests for ContributorSet goal selection.

Tests cover:
- Additive merge with first-occurrence ordering
- Declaration order wins over completion order
- All predicates started together
- Configuration errors for nested-tree outcomes
"""

from __future__ import annotations

import asyncio

import pytest

from pushgoals.exceptions import ConfigurationError, PredicateEvaluationError
from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import Goal, GoalSet
from pushgoals.predicates.evaluation import Evaluation
from pushgoals.rules import ContributorSet, DecisionTree, on_any_push, when_push
from tests.conftest import Recorder, make_context

g1, g2, g3 = Goal("g1"), Goal("g2"), Goal("g3")


async def _select(contributors: ContributorSet, config: EngineConfig | None = None):
    async with Evaluation(make_context(), config or EngineConfig()) as ev:
        return await contributors.select(ev)


class TestContributorSet:
    @pytest.mark.anyio
    async def test_matching_contributions_merge_in_order(self):
        contributors = ContributorSet(
            when_push(Recorder("p1"), goals=GoalSet.of("one", g1, g2)),
            when_push(Recorder("p2"), goals=GoalSet.of("two", g2, g3)),
        )
        selection = await _select(contributors)
        assert selection.goals.names == ("g1", "g2", "g3")
        assert selection.goals.label == "one + two"

    @pytest.mark.anyio
    async def test_non_matching_rules_contribute_nothing(self):
        contributors = ContributorSet(
            when_push(Recorder("p1", False), goals=GoalSet.of("one", g1)),
            when_push(Recorder("p2"), goals=GoalSet.of("two", g2)),
        )
        selection = await _select(contributors)
        assert selection.goals.names == ("g2",)
        assert selection.rationale == ("p2",)

    @pytest.mark.anyio
    async def test_nothing_matches(self):
        contributors = ContributorSet(when_push(Recorder("p1", False), goals=g1))
        assert not (await _select(contributors)).goals

    @pytest.mark.anyio
    async def test_declaration_order_beats_completion_order(self):
        contributors = ContributorSet(
            when_push(Recorder("slow", delay=0.05), goals=GoalSet.of("slow", g3, g1)),
            when_push(Recorder("fast"), goals=GoalSet.of("fast", g1, g2)),
        )
        assert (await _select(contributors)).goals.names == ("g3", "g1", "g2")

    @pytest.mark.anyio
    async def test_predicates_run_concurrently(self):
        contributors = ContributorSet(
            *(
                when_push(Recorder(f"p{i}", delay=0.1), goals=Goal(f"g{i}"))
                for i in range(5)
            )
        )
        loop = asyncio.get_running_loop()
        start = loop.time()
        selection = await _select(contributors)
        assert len(selection.goals) == 5
        assert loop.time() - start < 0.4

    @pytest.mark.anyio
    async def test_failure_aborts_selection(self):
        contributors = ContributorSet(
            on_any_push(GoalSet.of("checks", g1), means="Checks"),
            when_push(Recorder("bad", error=ValueError("x")), goals=g2, means="Build"),
        )
        with pytest.raises(PredicateEvaluationError) as exc_info:
            await _select(contributors)
        assert exc_info.value.rule_name == "Build"

    def test_tree_outcome_rejected(self):
        with pytest.raises(ConfigurationError):
            ContributorSet(on_any_push(DecisionTree()))
