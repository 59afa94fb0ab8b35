"""GoalSetter ABC -- the strategy that turns a push into candidate goals.

Two strategies exist over the same Rule/GoalSet primitives: the exclusive
DecisionTree and the additive ContributorSet. An engine uses exactly one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushgoals.models.goal import GoalSet
    from pushgoals.predicates.evaluation import Evaluation
    from pushgoals.rules.models import Rule, Selection


class GoalSetter(ABC):
    """Abstract base class for goal selection strategies."""

    name: str
    rules: tuple[Rule, ...]

    @abstractmethod
    async def select(self, evaluation: Evaluation) -> Selection:
        """Select the candidate goals for the push being evaluated."""
        ...

    @abstractmethod
    def goal_sets(self) -> Iterator[GoalSet]:
        """Yield every GoalSet this setter can produce (for validation)."""
        ...
