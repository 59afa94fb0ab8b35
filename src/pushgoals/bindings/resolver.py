"""Binding resolution -- the second phase of goal assembly.

Binding depends only on the goal (its name and category) and the push; it
never consults which rule selected the goal.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pushgoals.exceptions import BindingError
from pushgoals.models.plan import UNBOUND, PlanEntry

if TYPE_CHECKING:
    from pushgoals.bindings.table import BindingTable
    from pushgoals.models.goal import Goal, GoalCategory, GoalSet
    from pushgoals.predicates.evaluation import Evaluation

logger = logging.getLogger(__name__)


async def bind_goal(
    goal: Goal,
    table: BindingTable | None,
    evaluation: Evaluation,
) -> PlanEntry:
    """Bind one goal using the first matching rule of its category table."""
    if table is None:
        logger.debug("No binding table for category '%s'", goal.category.value)
        return PlanEntry(goal)

    for rule in table.candidates(goal):
        matched = await evaluation.test(
            rule.predicate, rule_name=f"{rule.name} (binding '{goal.name}')"
        )
        if matched:
            try:
                implementation = rule.build(goal, evaluation.ctx)
            except Exception as exc:
                raise BindingError(goal.name, rule.name, exc) from exc
            logger.debug("Goal '%s' bound by '%s'", goal.name, rule.name)
            return PlanEntry(goal, implementation, rule.name)

    logger.debug("Goal '%s' has no matching binding", goal.name)
    return PlanEntry(goal, UNBOUND)


async def bind_goals(
    goals: GoalSet,
    tables: Mapping[GoalCategory, BindingTable],
    evaluation: Evaluation,
) -> tuple[PlanEntry, ...]:
    """Bind every goal in order.

    With speculative evaluation, candidate push tests of all goals are
    started up front; goals are still bound, and errors raised, in goal
    order.
    """
    if evaluation.speculative:
        for goal in goals:
            table = tables.get(goal.category)
            if table is not None:
                for rule in table.candidates(goal):
                    evaluation.schedule(rule.predicate)

    entries = []
    for goal in goals:
        entries.append(await bind_goal(goal, tables.get(goal.category), evaluation))
    return tuple(entries)
