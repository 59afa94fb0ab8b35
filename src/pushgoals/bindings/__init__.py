"""Goal implementation bindings, one table per goal category."""

from pushgoals.bindings.table import (
    BindingRule,
    BindingTable,
    ImplementationFactory,
    bind_default,
    bind_when,
    build_rules,
    deploy_rules,
    disposal_rules,
)
from pushgoals.bindings.resolver import bind_goal, bind_goals

__all__ = [
    "BindingRule",
    "BindingTable",
    "ImplementationFactory",
    "bind_default",
    "bind_when",
    "build_rules",
    "deploy_rules",
    "disposal_rules",
    "bind_goal",
    "bind_goals",
]
