"""Binding tables -- category-scoped goal -> implementation rules.

Each goal category has one table of ordered binding rules. The first rule
whose goal filter admits the goal and whose push test matches supplies the
implementation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pushgoals.exceptions import ConfigurationError
from pushgoals.models.goal import Goal, GoalCategory
from pushgoals.predicates.builtin import AnyPush
from pushgoals.predicates.combinators import combine

if TYPE_CHECKING:
    from pushgoals.models.push import PushContext
    from pushgoals.predicates.protocols import PushTest

ImplementationFactory = Callable[[Goal, "PushContext"], Any]


@dataclass(frozen=True)
class BindingRule:
    """One row of a binding table.

    Attributes:
        predicate: Push test that must match for this rule to apply.
        implementation: The implementation itself, or a factory called with
            ``(goal, ctx)`` to build one. Any callable is treated as a factory.
        goals: Names of the goals this rule may bind. None admits every goal
            of the table's category.
        rationale: Human explanation used in plans and logs.
    """

    predicate: PushTest
    implementation: Any
    goals: frozenset[str] | None = None
    rationale: str | None = None

    def __post_init__(self) -> None:
        if self.goals is not None and not isinstance(self.goals, frozenset):
            object.__setattr__(self, "goals", frozenset(self.goals))

    @property
    def name(self) -> str:
        return self.rationale or self.predicate.name

    def admits(self, goal: Goal) -> bool:
        return self.goals is None or goal.name in self.goals

    def build(self, goal: Goal, ctx: PushContext) -> Any:
        if callable(self.implementation):
            return self.implementation(goal, ctx)
        return self.implementation


def _goal_names(goals: Iterable[Goal | str] | None) -> frozenset[str] | None:
    if goals is None:
        return None
    return frozenset(g.name if isinstance(g, Goal) else g for g in goals)


def bind_when(
    *tests: PushTest,
    use: Any,
    goals: Iterable[Goal | str] | None = None,
    means: str | None = None,
) -> BindingRule:
    """Bind *use* when all *tests* match.

    Example::

        bind_when(IsNode, HasPackageLock, use=npm_build("npm ci", "npm run build"),
                  means="npm run build")
    """
    if not tests:
        raise ValueError("bind_when() needs at least one push test; use bind_default()")
    return BindingRule(combine(tests), use, _goal_names(goals), means)


def bind_default(
    use: Any,
    goals: Iterable[Goal | str] | None = None,
    means: str | None = None,
) -> BindingRule:
    """Bind *use* on any push. Place it last: later rules are never reached."""
    return BindingRule(AnyPush, use, _goal_names(goals), means or "default")


class BindingTable:
    """Ordered binding rules for one goal category."""

    def __init__(self, category: GoalCategory, *rules: BindingRule) -> None:
        for rule in rules:
            if not isinstance(rule, BindingRule):
                raise ConfigurationError(
                    f"Binding table '{category.value}' contains {rule!r}, "
                    f"expected a BindingRule"
                )
        self.category = category
        self.rules: tuple[BindingRule, ...] = rules

    def __iter__(self) -> Iterator[BindingRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"<BindingTable {self.category.value} rules={len(self.rules)}>"

    def candidates(self, goal: Goal) -> list[BindingRule]:
        """Rules that may bind *goal*, in table order."""
        return [rule for rule in self.rules if rule.admits(goal)]


def build_rules(*rules: BindingRule) -> BindingTable:
    return BindingTable(GoalCategory.BUILD, *rules)


def deploy_rules(*rules: BindingRule) -> BindingTable:
    return BindingTable(GoalCategory.DEPLOY, *rules)


def disposal_rules(*rules: BindingRule) -> BindingTable:
    return BindingTable(GoalCategory.DISPOSAL, *rules)
