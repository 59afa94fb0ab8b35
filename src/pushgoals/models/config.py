"""Configuration models for pushgoals.

EngineConfig holds per-engine resolution settings. It is validated by
pydantic and can be read from the environment.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class EngineConfig(BaseModel):
    """Resolution settings for a GoalEngine.

    Attributes:
        predicate_timeout: Seconds a rule-level push test may take before it
            counts as failed. None disables the bound.
        max_concurrency: Maximum rule-level push tests in flight per resolution.
        speculative: Evaluate decision tree rules ahead of the current one
            and cancel the leftovers once a rule matches.
    """

    model_config = {"frozen": True}

    predicate_timeout: Optional[float] = Field(default=30.0, gt=0)
    max_concurrency: int = Field(default=8, ge=1)
    speculative: bool = True

    @classmethod
    def from_env(cls, **overrides) -> EngineConfig:
        """Build a config from ``PUSHGOALS_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        values: dict = {}
        timeout = os.environ.get("PUSHGOALS_PREDICATE_TIMEOUT")
        if timeout is not None:
            values["predicate_timeout"] = (
                None if timeout.strip().lower() in ("", "none") else float(timeout)
            )
        concurrency = os.environ.get("PUSHGOALS_MAX_CONCURRENCY")
        if concurrency is not None:
            values["max_concurrency"] = int(concurrency)
        speculative = os.environ.get("PUSHGOALS_SPECULATIVE")
        if speculative is not None:
            values["speculative"] = speculative.strip().lower() in _TRUTHY
        values.update(overrides)
        return cls(**values)
