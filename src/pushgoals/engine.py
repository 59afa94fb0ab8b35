"""GoalEngine -- turns one push into an ordered, bound GoalPlan.

Resolution runs in one pass:
    1. The goal setter (DecisionTree or ContributorSet) selects candidate goals.
    2. Override gates replace the goals they govern when their test is true.
    3. Each goal is bound via the binding table of its category.

The engine is built once and is read-only afterwards. Every resolution gets
its own Evaluation, so concurrent pushes share nothing mutable and a failure
in one push never affects another.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

from pushgoals.bindings.resolver import bind_goals
from pushgoals.bindings.table import BindingTable
from pushgoals.exceptions import ConfigurationError, UnresolvedGoalError
from pushgoals.gates import OverrideGate, apply_gates, check_gates
from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import Goal, GoalSet
from pushgoals.models.plan import GoalPlan
from pushgoals.predicates.evaluation import Evaluation
from pushgoals.rules.protocols import GoalSetter
from pushgoals.rules.tree import DecisionTree

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pushgoals.models.goal import GoalCategory
    from pushgoals.models.push import PushContext

logger = logging.getLogger(__name__)


class GoalEngine:
    """A configured delivery machine.

    Example::

        engine = GoalEngine(
            DecisionTree(when_push(HasProcfile, goals=[BuildGoal, StagingDeploymentGoal])),
            bindings=[build_rules(bind_default(maven)),
                      deploy_rules(bind_default(staging))],
            gates=[deployment_freeze_gate()],
        )
        plan = await engine.resolve(ctx)

    Raises:
        ConfigurationError: From the constructor, if the configuration is
            inconsistent (overlapping gates, duplicate binding categories,
            one goal name declared with conflicting semantics).
    """

    def __init__(
        self,
        goal_setter: GoalSetter,
        *,
        name: str = "delivery machine",
        bindings: Iterable[BindingTable] = (),
        gates: Sequence[OverrideGate] = (),
        disposal: DecisionTree | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if not isinstance(goal_setter, GoalSetter):
            raise ConfigurationError(
                f"Engine '{name}' needs a DecisionTree or ContributorSet, "
                f"got {goal_setter!r}"
            )
        if disposal is not None and not isinstance(disposal, DecisionTree):
            raise ConfigurationError(
                f"Engine '{name}' disposal rules must be a DecisionTree"
            )
        self.name = name
        self.config = config or EngineConfig()
        self._goal_setter = goal_setter
        self._gates: tuple[OverrideGate, ...] = tuple(gates)
        self._disposal = disposal

        tables: dict[GoalCategory, BindingTable] = {}
        for table in bindings:
            if table.category in tables:
                raise ConfigurationError(
                    f"Engine '{name}' has two binding tables for category "
                    f"'{table.category.value}'"
                )
            tables[table.category] = table
        self._bindings: Mapping[GoalCategory, BindingTable] = MappingProxyType(tables)

        check_gates(self._gates)
        self._check_goal_declarations()

    def __repr__(self) -> str:
        return f"<GoalEngine {self.name!r} setter={self._goal_setter!r}>"

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    @property
    def goal_setter(self) -> GoalSetter:
        return self._goal_setter

    @property
    def gates(self) -> tuple[OverrideGate, ...]:
        return self._gates

    @property
    def bindings(self) -> Mapping[GoalCategory, BindingTable]:
        return self._bindings

    @property
    def disposal(self) -> DecisionTree | None:
        return self._disposal

    def declared_goals(self) -> list[Goal]:
        """Every goal the engine can produce, in first-declared order."""
        return list(self._all_goal_sets_merged())

    def _all_goal_sets_merged(self) -> GoalSet:
        merged = GoalSet.empty("declared")
        for goal_set in self._iter_goal_sets():
            merged = merged.merge(goal_set)
        return merged

    def _iter_goal_sets(self) -> Iterable[GoalSet]:
        yield from self._goal_setter.goal_sets()
        for gate in self._gates:
            yield gate.replacement
        if self._disposal is not None:
            yield from self._disposal.goal_sets()

    def _check_goal_declarations(self) -> None:
        seen: dict[str, Goal] = {}
        for goal_set in self._iter_goal_sets():
            for goal in goal_set:
                first = seen.setdefault(goal.name, goal)
                if (first.category, first.required) != (goal.category, goal.required):
                    raise ConfigurationError(
                        f"Goal '{goal.name}' is declared with conflicting semantics: "
                        f"{first.category.value} (required={first.required}) and "
                        f"{goal.category.value} (required={goal.required})"
                    )
        for gate in self._gates:
            if gate.governs is not None and not gate.governs & seen.keys():
                logger.warning(
                    "Override gate '%s' governs goals no rule produces: %s",
                    gate.name,
                    sorted(gate.governs),
                )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def plan(self, ctx: PushContext) -> GoalPlan:
        """Resolve *ctx* into a GoalPlan, keeping unbound goals as UNBOUND.

        Raises:
            PredicateEvaluationError: If a push test fails or times out.
            BindingError: If an implementation factory fails.
        """
        async with Evaluation(ctx, self.config) as evaluation:
            selection = await self._goal_setter.select(evaluation)
            goals, fired = await apply_gates(selection.goals, self._gates, evaluation)
            entries = await bind_goals(goals, self._bindings, evaluation)

        plan = GoalPlan(goals.label, entries, selection.rationale, fired)
        logger.info(
            "%s: %s@%s on '%s' -> %s%s",
            self.name,
            ctx.repo.slug,
            ctx.short_sha,
            ctx.branch,
            plan.goal_names or "no goals",
            f" (overridden by {', '.join(fired)})" if fired else "",
        )
        return plan

    async def resolve(self, ctx: PushContext) -> GoalPlan:
        """Resolve *ctx* into a GoalPlan in which every required goal is bound.

        Raises:
            UnresolvedGoalError: Listing all unbound required goals.
            PredicateEvaluationError: If a push test fails or times out.
            BindingError: If an implementation factory fails.
        """
        plan = await self.plan(ctx)
        if plan.unbound_required:
            raise UnresolvedGoalError(plan.unbound_required)
        return plan

    async def dispose(self, ctx: PushContext, *, strict: bool = True) -> GoalPlan:
        """Select and bind disposal goals (undeploy, repository deletion).

        Override gates do not apply to disposal. An engine without disposal
        rules yields an empty plan.
        """
        if self._disposal is None:
            return GoalPlan(GoalSet.empty().label)
        async with Evaluation(ctx, self.config) as evaluation:
            selection = await self._disposal.select(evaluation)
            entries = await bind_goals(selection.goals, self._bindings, evaluation)
        plan = GoalPlan(selection.goals.label, entries, selection.rationale)
        logger.info(
            "%s: disposal of %s -> %s",
            self.name,
            ctx.repo.slug,
            plan.goal_names or "no goals",
        )
        if strict and plan.unbound_required:
            raise UnresolvedGoalError(plan.unbound_required)
        return plan

    async def resolve_many(
        self, contexts: Iterable[PushContext]
    ) -> list[GoalPlan | Exception]:
        """Resolve several pushes concurrently.

        Each push succeeds or fails on its own; failures are returned in
        place of the plan rather than raised.
        """
        results = await asyncio.gather(
            *(self.resolve(ctx) for ctx in contexts), return_exceptions=True
        )
        out: list[GoalPlan | Exception] = []
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            out.append(result)
        return out
