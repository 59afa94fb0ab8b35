"""Sample delivery machines, registered by name."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from pushgoals.engine import GoalEngine
from pushgoals.exceptions import ConfigurationError
from pushgoals.machines.additive import additive_cloud_foundry_machine
from pushgoals.machines.cloud_foundry import cloud_foundry_machine
from pushgoals.machines.static_analysis import static_analysis_machine
from pushgoals.models.config import EngineConfig

MachineFactory = Callable[[Optional[EngineConfig]], GoalEngine]

MACHINES: dict[str, MachineFactory] = {
    "cloud-foundry": cloud_foundry_machine,
    "additive-cloud-foundry": additive_cloud_foundry_machine,
    "static-analysis": static_analysis_machine,
}


def get_machine(name: str, config: EngineConfig | None = None) -> GoalEngine:
    """Build the machine registered as *name*.

    Raises:
        ConfigurationError: If no machine has that name.
    """
    try:
        factory = MACHINES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown machine '{name}'. Available: {', '.join(sorted(MACHINES))}"
        ) from None
    return factory(config)


__all__ = [
    "MACHINES",
    "MachineFactory",
    "get_machine",
    "additive_cloud_foundry_machine",
    "cloud_foundry_machine",
    "static_analysis_machine",
]
