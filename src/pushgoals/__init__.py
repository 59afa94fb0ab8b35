"""pushgoals: decide which delivery goals a push should run.

A push is matched against goal-setting rules, override gates swap goals out
when their conditions hold, and each remaining goal is bound to the
implementation that will carry it out. The result is an ordered GoalPlan.
"""

from pushgoals._version import __version__

# Core entry point
from pushgoals.engine import GoalEngine

# Models
from pushgoals.models import (
    UNBOUND,
    DeploymentStatus,
    EngineConfig,
    Goal,
    GoalCategory,
    GoalPlan,
    GoalSet,
    Implementation,
    PlanEntry,
    PushContext,
    RepoRef,
    merge_goal_sets,
)

# Push tests
from pushgoals.predicates import (
    AnyPush,
    Evaluation,
    PredicatePushTest,
    PushTest,
    all_of,
    any_of,
    not_,
    push_test,
)

# Rules, gates and bindings
from pushgoals.rules import ContributorSet, DecisionTree, Rule, given, on_any_push, when_push
from pushgoals.gates import OverrideGate
from pushgoals.bindings import (
    BindingRule,
    BindingTable,
    bind_default,
    bind_when,
    build_rules,
    deploy_rules,
    disposal_rules,
)
from pushgoals.freeze import DeploymentStatusStore, deployment_freeze_gate

# Project content
from pushgoals.protocols import ProjectContent
from pushgoals.content import HttpProject, InMemoryProject, LocalProject

# Exceptions
from pushgoals.exceptions import (
    BindingError,
    ConfigurationError,
    ContentAccessError,
    PredicateEvaluationError,
    PredicateTimeoutError,
    PushGoalsError,
    UnresolvedGoalError,
)

__all__ = [
    "__version__",
    "GoalEngine",
    # Models
    "UNBOUND",
    "DeploymentStatus",
    "EngineConfig",
    "Goal",
    "GoalCategory",
    "GoalPlan",
    "GoalSet",
    "Implementation",
    "PlanEntry",
    "PushContext",
    "RepoRef",
    "merge_goal_sets",
    # Push tests
    "AnyPush",
    "Evaluation",
    "PredicatePushTest",
    "PushTest",
    "all_of",
    "any_of",
    "not_",
    "push_test",
    # Rules, gates, bindings
    "ContributorSet",
    "DecisionTree",
    "Rule",
    "given",
    "on_any_push",
    "when_push",
    "OverrideGate",
    "BindingRule",
    "BindingTable",
    "bind_default",
    "bind_when",
    "build_rules",
    "deploy_rules",
    "disposal_rules",
    "DeploymentStatusStore",
    "deployment_freeze_gate",
    # Project content
    "ProjectContent",
    "HttpProject",
    "InMemoryProject",
    "LocalProject",
    # Exceptions
    "BindingError",
    "ConfigurationError",
    "ContentAccessError",
    "PredicateEvaluationError",
    "PredicateTimeoutError",
    "PushGoalsError",
    "UnresolvedGoalError",
]
