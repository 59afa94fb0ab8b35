"""GoalPlan -- the ordered result of resolving one push.

The plan is handed to an external executor. Every goal appears exactly once,
either bound to an implementation or explicitly marked UNBOUND.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pushgoals.models.goal import Goal, GoalSet


class _Unbound(enum.Enum):
    UNBOUND = "unbound"

    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND = _Unbound.UNBOUND


@dataclass(frozen=True)
class Implementation:
    """A concrete, executor-facing implementation of a goal.

    The engine never runs it; it only selects it.

    Attributes:
        name: Identifier the executor dispatches on (e.g. "maven-build").
        description: Human-readable summary.
        params: Executor-specific parameters (commands, targets, messages).
    """

    name: str
    description: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlanEntry:
    """One goal in a plan and what it was bound to."""

    goal: Goal
    implementation: Any = UNBOUND
    binding: str | None = None  # rationale of the binding rule that matched

    @property
    def is_bound(self) -> bool:
        return self.implementation is not UNBOUND


@dataclass(frozen=True)
class GoalPlan:
    """Ordered mapping from goal to bound implementation.

    Attributes:
        label: Label of the final goal set.
        entries: One entry per goal, in goal set order.
        rationale: Rationales of the rules that selected goals, in order.
        overrides: Names of the override gates that fired.
    """

    label: str
    entries: tuple[PlanEntry, ...] = ()
    rationale: tuple[str, ...] = ()
    overrides: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def goals(self) -> GoalSet:
        return GoalSet(self.label, tuple(e.goal for e in self.entries))

    @property
    def goal_names(self) -> list[str]:
        return [e.goal.name for e in self.entries]

    @property
    def unbound(self) -> list[Goal]:
        return [e.goal for e in self.entries if not e.is_bound]

    @property
    def unbound_required(self) -> list[Goal]:
        return [e.goal for e in self.entries if not e.is_bound and e.goal.required]

    @property
    def is_complete(self) -> bool:
        """True if every required goal is bound."""
        return not self.unbound_required

    def implementation_for(self, goal: Goal | str) -> Any:
        """Return the implementation bound to *goal* (or UNBOUND).

        Raises:
            KeyError: If the goal is not part of this plan.
        """
        name = goal.name if isinstance(goal, Goal) else goal
        for entry in self.entries:
            if entry.goal.name == name:
                return entry.implementation
        raise KeyError(name)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        goals = []
        for entry in self.entries:
            impl = entry.implementation
            if impl is UNBOUND:
                impl_value: Any = None
            elif isinstance(impl, Implementation):
                impl_value = {
                    "name": impl.name,
                    "description": impl.description,
                    "params": dict(impl.params),
                }
            else:
                impl_value = repr(impl)
            goals.append({
                "name": entry.goal.name,
                "category": entry.goal.category.value,
                "required": entry.goal.required,
                "bound": entry.is_bound,
                "binding": entry.binding,
                "implementation": impl_value,
            })
        return {
            "label": self.label,
            "goals": goals,
            "rationale": list(self.rationale),
            "overrides": list(self.overrides),
        }
