"""ContributorSet -- additive goal selection.

Every rule whose push test matches contributes its GoalSet. All push tests
are started together (bounded by the evaluation's semaphore); contributions
are merged in rule declaration order regardless of completion order, so the
first occurrence of a goal name keeps its position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pushgoals.exceptions import ConfigurationError
from pushgoals.models.goal import GoalSet, merge_goal_sets
from pushgoals.rules.models import Rule, Selection
from pushgoals.rules.protocols import GoalSetter

if TYPE_CHECKING:
    from pushgoals.predicates.evaluation import Evaluation

logger = logging.getLogger(__name__)


class ContributorSet(GoalSetter):
    """Ordered contributor rules whose matching outcomes are all merged.

    Example::

        ContributorSet(
            on_any_push(CheckGoals),
            when_push(IsMaven, goals=BuildGoal),
            when_push(HasCloudFoundryManifest, ToDefaultBranch,
                      goals=StagingDeploymentGoals),
        )
    """

    def __init__(self, *rules: Rule, name: str = "contributors") -> None:
        for rule in rules:
            if not isinstance(rule, Rule) or not isinstance(rule.outcome, GoalSet):
                raise ConfigurationError(
                    f"Contributor set '{name}' rules must set a GoalSet, got {rule!r}"
                )
        self.rules: tuple[Rule, ...] = rules
        self.name = name

    def __repr__(self) -> str:
        return f"<ContributorSet {self.name!r} rules={len(self.rules)}>"

    def goal_sets(self) -> Iterator[GoalSet]:
        for rule in self.rules:
            yield rule.outcome

    async def select(self, evaluation: Evaluation) -> Selection:
        for rule in self.rules:
            evaluation.schedule(rule.predicate)

        contributed: list[Rule] = []
        for rule in self.rules:
            if await evaluation.test(rule.predicate, rule_name=rule.name):
                logger.debug("Contributor '%s' matched", rule.name)
                contributed.append(rule)

        if not contributed:
            return Selection(GoalSet.empty())
        label = " + ".join(rule.outcome.label for rule in contributed)
        goals = merge_goal_sets((rule.outcome for rule in contributed), label)
        return Selection(goals, tuple(rule.name for rule in contributed))
