"""Override gates -- predicates that supersede part of a computed goal set.

Gates run after the primary goal set is computed. Every gate is judged
against the primary result, never against another gate's output, so gate
order does not matter. Gates governing overlapping goals, or replacing with a
goal another gate governs, are rejected when the engine is built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pushgoals.exceptions import ConfigurationError
from pushgoals.models.goal import Goal, GoalSet

if TYPE_CHECKING:
    from pushgoals.predicates.evaluation import Evaluation
    from pushgoals.predicates.protocols import PushTest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverrideGate:
    """A push test that, when true, replaces the goals it governs.

    Attributes:
        name: Gate name for logs and plan overrides.
        predicate: Push test deciding whether the gate fires.
        replacement: Goals inserted where the first governed goal stood.
            An empty GoalSet suppresses the governed goals.
        governs: Names of the goals this gate governs. None governs the
            whole goal set.
    """

    name: str
    predicate: PushTest
    replacement: GoalSet
    governs: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if self.governs is not None and not isinstance(self.governs, frozenset):
            object.__setattr__(self, "governs", frozenset(self.governs))

    @classmethod
    def for_goals(
        cls,
        name: str,
        predicate: PushTest,
        goals: Iterable[Goal],
        replacement: GoalSet,
    ) -> OverrideGate:
        return cls(name, predicate, replacement, frozenset(g.name for g in goals))

    def governed_in(self, goals: GoalSet) -> list[str]:
        """Names of goals in *goals* that this gate governs, in order."""
        if self.governs is None:
            return list(goals.names)
        return [n for n in goals.names if n in self.governs]

    def overlaps(self, other: OverrideGate) -> bool:
        if self.governs is None or other.governs is None:
            return True
        return bool(self.governs & other.governs)

    def feeds(self, other: OverrideGate) -> list[str]:
        """Names in this gate's replacement that *other* governs."""
        return other.governed_in(self.replacement)


def check_gates(gates: Sequence[OverrideGate]) -> None:
    """Raise ConfigurationError if two gates can interact.

    Gates interact when they govern overlapping goals or when one gate's
    replacement contains a goal another gate governs.
    """
    names: set[str] = set()
    for gate in gates:
        if gate.name in names:
            raise ConfigurationError(f"Duplicate override gate name '{gate.name}'")
        names.add(gate.name)
    for i, first in enumerate(gates):
        for second in gates[i + 1:]:
            if first.overlaps(second):
                shared = (
                    "all goals" if first.governs is None or second.governs is None
                    else ", ".join(sorted(first.governs & second.governs))
                )
                raise ConfigurationError(
                    f"Override gates '{first.name}' and '{second.name}' "
                    f"both govern {shared}"
                )
            for source, target in ((first, second), (second, first)):
                fed = source.feeds(target)
                if fed:
                    raise ConfigurationError(
                        f"Override gate '{source.name}' replaces with "
                        f"{', '.join(fed)} governed by gate '{target.name}'"
                    )


async def apply_gates(
    primary: GoalSet,
    gates: Sequence[OverrideGate],
    evaluation: Evaluation,
) -> tuple[GoalSet, tuple[str, ...]]:
    """Apply *gates* to *primary*.

    Returns the final goal set and the names of the gates that fired. A gate
    none of whose governed goals is present is inert and its push test is
    not evaluated.
    """
    relevant = [(gate, gate.governed_in(primary)) for gate in gates]
    relevant = [(gate, governed) for gate, governed in relevant if governed]
    for gate, _ in relevant:
        evaluation.schedule(gate.predicate)

    removed: set[str] = set()
    inserts: dict[str, GoalSet] = {}
    fired: list[str] = []
    for gate, governed in relevant:
        if not await evaluation.test(gate.predicate, rule_name=f"gate:{gate.name}"):
            continue
        logger.debug(
            "Override gate '%s' replaces %s with %s",
            gate.name,
            governed,
            list(gate.replacement.names),
        )
        fired.append(gate.name)
        removed.update(governed)
        inserts[governed[0]] = gate.replacement

    if not fired:
        return primary, ()

    goals: list[Goal] = []
    for goal in primary:
        if goal.name in inserts:
            goals.extend(inserts[goal.name])
        if goal.name not in removed:
            goals.append(goal)
    return GoalSet(primary.label, tuple(goals)), tuple(fired)
