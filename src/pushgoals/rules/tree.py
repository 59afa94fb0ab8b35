"""DecisionTree -- exclusive, first-match-wins goal selection.

Rules are adopted strictly in declared order. With speculative evaluation
enabled, later rules' push tests are started ahead of time (bounded by the
evaluation's semaphore) and cancelled as soon as an earlier rule matches;
the outcome is the same as strictly serial evaluation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pushgoals.exceptions import ConfigurationError
from pushgoals.models.goal import GoalSet
from pushgoals.rules.models import Rule, Selection
from pushgoals.rules.protocols import GoalSetter

if TYPE_CHECKING:
    from pushgoals.predicates.evaluation import Evaluation

logger = logging.getLogger(__name__)


class DecisionTree(GoalSetter):
    """Ordered rules evaluated with first-match-wins semantics.

    A matched rule whose outcome is itself a DecisionTree is evaluated
    recursively with the same push; its result is returned and outer
    siblings are not considered. No match yields an empty GoalSet.
    """

    def __init__(self, *rules: Rule, name: str = "decision tree") -> None:
        for rule in rules:
            if not isinstance(rule, Rule):
                raise ConfigurationError(
                    f"Decision tree '{name}' contains {rule!r}, expected a Rule"
                )
        self.rules: tuple[Rule, ...] = rules
        self.name = name

    def __repr__(self) -> str:
        return f"<DecisionTree {self.name!r} rules={len(self.rules)}>"

    def goal_sets(self) -> Iterator[GoalSet]:
        for rule in self.rules:
            if isinstance(rule.outcome, DecisionTree):
                yield from rule.outcome.goal_sets()
            else:
                yield rule.outcome

    async def select(self, evaluation: Evaluation) -> Selection:
        if evaluation.speculative:
            for rule in self.rules:
                evaluation.schedule(rule.predicate)

        for index, rule in enumerate(self.rules):
            if not await evaluation.test(rule.predicate, rule_name=rule.name):
                continue
            logger.debug("Tree '%s': rule '%s' matched", self.name, rule.name)
            if evaluation.speculative:
                evaluation.discard(r.predicate for r in self.rules[index + 1:])
            return await self._adopt(rule, evaluation)

        logger.debug("Tree '%s': no rule matched", self.name)
        return Selection(GoalSet.empty())

    async def _adopt(self, rule: Rule, evaluation: Evaluation) -> Selection:
        if isinstance(rule.outcome, DecisionTree):
            nested = await rule.outcome.select(evaluation)
            return Selection(nested.goals, (rule.name, *nested.rationale))
        return Selection(rule.outcome, (rule.name,))
