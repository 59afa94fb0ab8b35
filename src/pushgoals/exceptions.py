"""pushgoals exception hierarchy.

All pushgoals-specific exceptions inherit from PushGoalsError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushgoals.models.goal import Goal


class PushGoalsError(Exception):
    """Base exception for all pushgoals errors."""


class ConfigurationError(PushGoalsError):
    """Raised when an engine is built from an inconsistent configuration.

    Detected at construction time; an engine that raises this never starts.
    """


class PredicateEvaluationError(PushGoalsError):
    """Raised when a push test fails to produce a result.

    A failed predicate is never treated as false: the containing rule fails
    and resolution of that push is aborted.

    Attributes:
        predicate_name: Name of the push test that failed.
        rule_name: Name of the rule whose predicate failed, when known.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        predicate_name: str,
        *,
        rule_name: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.predicate_name = predicate_name
        self.rule_name = rule_name
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        msg = f"Push test '{self.predicate_name}' failed"
        if self.rule_name is not None:
            msg += f" in rule '{self.rule_name}'"
        if self.cause is not None:
            msg += f": {type(self.cause).__name__}: {self.cause}"
        return msg

    def in_rule(self, rule_name: str) -> PredicateEvaluationError:
        """Return a copy of this error attributed to *rule_name*."""
        return type(self)(self.predicate_name, rule_name=rule_name, cause=self.cause)


class PredicateTimeoutError(PredicateEvaluationError):
    """Raised when a push test does not complete within the configured bound."""

    def __init__(
        self,
        predicate_name: str,
        *,
        rule_name: str | None = None,
        cause: BaseException | None = None,
        timeout: float | None = None,
    ) -> None:
        self.timeout = timeout
        super().__init__(predicate_name, rule_name=rule_name, cause=cause)

    def _describe(self) -> str:
        msg = f"Push test '{self.predicate_name}' timed out"
        if self.timeout is not None:
            msg += f" after {self.timeout}s"
        if self.rule_name is not None:
            msg += f" in rule '{self.rule_name}'"
        return msg

    def in_rule(self, rule_name: str) -> PredicateTimeoutError:
        return type(self)(
            self.predicate_name,
            rule_name=rule_name,
            cause=self.cause,
            timeout=self.timeout,
        )


class UnresolvedGoalError(PushGoalsError):
    """Raised when a plan contains required goals with no matching binding.

    Carries every unbound goal so all missing rules can be fixed in one pass.
    """

    def __init__(self, goals: list[Goal]) -> None:
        self.goals = list(goals)
        names = ", ".join(f"'{g.name}' ({g.category.value})" for g in self.goals)
        super().__init__(
            f"{len(self.goals)} goal(s) have no matching implementation: {names}"
        )

    @property
    def goal_names(self) -> list[str]:
        return [g.name for g in self.goals]


class BindingError(PushGoalsError):
    """Raised when an implementation factory fails while binding a goal."""

    def __init__(self, goal_name: str, rule_name: str, cause: BaseException) -> None:
        self.goal_name = goal_name
        self.rule_name = rule_name
        self.cause = cause
        super().__init__(
            f"Binding rule '{rule_name}' failed to build an implementation "
            f"for goal '{goal_name}': {type(cause).__name__}: {cause}"
        )


class ContentAccessError(PushGoalsError):
    """Raised when project content cannot be read (after any retries)."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot read '{path}': {message}")
