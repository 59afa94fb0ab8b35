"""Goal and GoalSet domain models.

A Goal is an abstract, named unit of delivery work. It carries no behavior;
implementations are attached later by category-scoped binding tables.
A GoalSet is an ordered, name-deduplicated, immutable collection of goals.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


class GoalCategory(str, enum.Enum):
    """Binding category of a goal. Each category has its own binding table."""

    BUILD = "build"
    ARTIFACT = "artifact"
    INSPECTION = "inspection"
    DEPLOY = "deploy"
    VERIFY = "verify"
    DISPOSAL = "disposal"
    MESSAGE = "message"


@dataclass(frozen=True, eq=False)
class Goal:
    """An abstract delivery goal.

    Two goals are equal iff their names are equal; this is the basis for
    deduplication in GoalSet.

    Attributes:
        name: Process-unique identifier (e.g. "build", "staging-deploy").
        category: Binding category used to pick the implementation table.
        label: Optional human-readable description.
        required: If True, the goal must be bound for ``resolve`` to succeed.
    """

    name: str
    category: GoalCategory = GoalCategory.BUILD
    label: str | None = None
    required: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Goal name must be non-empty")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Goal):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Goal({self.name!r}, {self.category.value})"

    @property
    def display_name(self) -> str:
        return self.label or self.name


@dataclass(frozen=True)
class GoalSet:
    """Ordered, name-deduplicated, immutable collection of goals.

    Duplicates collapse to their first occurrence. Merging produces a new
    GoalSet; no operation mutates an existing one.

    Example::

        checks = GoalSet("Checks", [ReviewGoal, AutofixGoal])
        combined = checks.merge(GoalSet("Build", [BuildGoal, ReviewGoal]))
        # -> [review, autofix, build]
    """

    label: str
    goals: tuple[Goal, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        unique: list[Goal] = []
        for goal in self.goals:
            if goal.name not in seen:
                seen.add(goal.name)
                unique.append(goal)
        object.__setattr__(self, "goals", tuple(unique))

    @classmethod
    def of(cls, label: str, *goals: Goal) -> GoalSet:
        """Build a GoalSet from positional goals."""
        return cls(label, goals)

    @classmethod
    def empty(cls, label: str = "No goals") -> GoalSet:
        return cls(label, ())

    def __iter__(self) -> Iterator[Goal]:
        return iter(self.goals)

    def __len__(self) -> int:
        return len(self.goals)

    def __bool__(self) -> bool:
        return bool(self.goals)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Goal):
            item = item.name
        return item in self.names

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(g.name for g in self.goals)

    def merge(self, other: Iterable[Goal], label: str | None = None) -> GoalSet:
        """Ordered union: goals already present keep their position."""
        return GoalSet(label or self.label, (*self.goals, *other))

    def without(self, names: Iterable[str], label: str | None = None) -> GoalSet:
        """Return a copy without the goals whose names are in *names*."""
        excluded = set(names)
        return GoalSet(
            label or self.label,
            tuple(g for g in self.goals if g.name not in excluded),
        )


def merge_goal_sets(goal_sets: Iterable[GoalSet], label: str) -> GoalSet:
    """Merge goal sets in order with name-deduplicating union."""
    merged: list[Goal] = []
    for goal_set in goal_sets:
        merged.extend(goal_set.goals)
    return GoalSet(label, tuple(merged))
