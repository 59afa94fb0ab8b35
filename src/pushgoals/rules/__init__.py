"""Goal-setting rules: decision trees and contributor sets."""

from pushgoals.rules.models import Rule, Selection, as_goal_set, given, on_any_push, when_push
from pushgoals.rules.protocols import GoalSetter
from pushgoals.rules.tree import DecisionTree
from pushgoals.rules.contributors import ContributorSet

__all__ = [
    "Rule",
    "Selection",
    "as_goal_set",
    "given",
    "on_any_push",
    "when_push",
    "GoalSetter",
    "DecisionTree",
    "ContributorSet",
]
