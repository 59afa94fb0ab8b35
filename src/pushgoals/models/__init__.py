"""Domain models for pushgoals."""

from pushgoals.models.config import EngineConfig
from pushgoals.models.goal import Goal, GoalCategory, GoalSet, merge_goal_sets
from pushgoals.models.plan import UNBOUND, GoalPlan, Implementation, PlanEntry
from pushgoals.models.push import DeploymentStatus, PushContext, RepoRef

__all__ = [
    "EngineConfig",
    "Goal",
    "GoalCategory",
    "GoalSet",
    "merge_goal_sets",
    "UNBOUND",
    "GoalPlan",
    "Implementation",
    "PlanEntry",
    "DeploymentStatus",
    "PushContext",
    "RepoRef",
]
