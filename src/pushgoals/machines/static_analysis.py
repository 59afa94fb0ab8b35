"""Static analysis machine: review Java changes, nothing else."""

from __future__ import annotations

from pushgoals.engine import GoalEngine
from pushgoals.goals import ReviewOnlyGoals
from pushgoals.machines.tables import check_bindings
from pushgoals.models.config import EngineConfig
from pushgoals.predicates.builtin import IsJvm, MaterialChangeToJavaRepo
from pushgoals.rules.models import when_push
from pushgoals.rules.tree import DecisionTree


def static_analysis_machine(config: EngineConfig | None = None) -> GoalEngine:
    return GoalEngine(
        DecisionTree(
            when_push(IsJvm, MaterialChangeToJavaRepo, goals=ReviewOnlyGoals, means="Change to Java"),
            name="static analysis goals",
        ),
        name="Static analysis machine",
        bindings=[check_bindings()],
        config=config,
    )
