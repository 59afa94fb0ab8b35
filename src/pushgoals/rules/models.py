"""Rule and Selection models, plus the helpers used to declare rules.

A Rule pairs a push test with an outcome. Tree rules may use a nested
DecisionTree as their outcome; contributor rules always use a GoalSet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pushgoals.models.goal import Goal, GoalSet
from pushgoals.predicates.builtin import AnyPush
from pushgoals.predicates.combinators import combine

if TYPE_CHECKING:
    from pushgoals.predicates.protocols import PushTest
    from pushgoals.rules.tree import DecisionTree

GoalsLike = Union[GoalSet, Goal, Iterable[Goal]]


def as_goal_set(goals: GoalsLike, label: str) -> GoalSet:
    """Normalize a GoalSet, single Goal or iterable of goals to a GoalSet."""
    if isinstance(goals, GoalSet):
        return goals
    if isinstance(goals, Goal):
        return GoalSet(label, (goals,))
    return GoalSet(label, tuple(goals))


@dataclass(frozen=True)
class Rule:
    """A push test and the outcome adopted when it matches.

    Attributes:
        predicate: Push test guarding the rule.
        outcome: GoalSet, or a nested DecisionTree for tree rules.
        rationale: Human explanation ("Build and deploy Node"), used in logs,
            error messages and plan rationale.
    """

    predicate: PushTest
    outcome: Union[GoalSet, DecisionTree]
    rationale: str | None = None

    @property
    def name(self) -> str:
        return self.rationale or self.predicate.name


@dataclass(frozen=True)
class Selection:
    """Goals chosen by a goal setter and the rules that chose them."""

    goals: GoalSet
    rationale: tuple[str, ...] = ()


def when_push(
    *tests: PushTest,
    goals: GoalsLike | DecisionTree,
    means: str | None = None,
) -> Rule:
    """Declare a rule that fires when all *tests* match.

    Example::

        when_push(IsNode, HasDockerfile, goals=NpmDockerGoals,
                  means="Docker build Node")
    """
    from pushgoals.rules.tree import DecisionTree

    if not tests:
        raise ValueError("when_push() needs at least one push test; use on_any_push()")
    predicate = combine(tests)
    if isinstance(goals, DecisionTree):
        return Rule(predicate, goals, means)
    return Rule(predicate, as_goal_set(goals, means or predicate.name), means)


def on_any_push(goals: GoalsLike | DecisionTree, means: str | None = None) -> Rule:
    """Declare a rule that fires on every push."""
    return when_push(AnyPush, goals=goals, means=means)


def given(*tests: PushTest, means: str | None = None, rules: Iterable[Rule]) -> Rule:
    """Declare a rule whose outcome is a nested decision tree.

    When *tests* match, the nested *rules* are evaluated and outer sibling
    rules are not considered, even if no nested rule matches.
    """
    from pushgoals.rules.tree import DecisionTree

    tree = DecisionTree(*rules, name=means or "nested")
    return when_push(*tests, goals=tree, means=means)
