"""Enumerable parameter descriptors for building control panels.

A host walks ``PARAMETERS`` to lay out whatever widgets it likes; reading and
writing go through the descriptor so the simulation never depends on a UI
toolkit.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .config import FlowFieldConfig

if TYPE_CHECKING:
    from .simulation import SimulationContext


def _field_bounds(name: str) -> Tuple[Optional[float], Optional[float]]:
    """Read the ge/le bounds declared on a config field."""
    low = high = None
    for constraint in FlowFieldConfig.model_fields[name].metadata:
        low = getattr(constraint, "ge", low)
        high = getattr(constraint, "le", high)
    return low, high


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    group: str
    kind: type
    restarts: bool = False  # changing it rebuilds the field and particles

    @property
    def valid_range(self) -> Tuple[Optional[float], Optional[float]]:
        return _field_bounds(self.name)

    def get(self, context: "SimulationContext") -> Any:
        return getattr(context.config, self.name)

    def set(self, context: "SimulationContext", value: Any) -> None:
        context.set_parameter(self.name, value)


PARAMETERS: List[ParameterDescriptor] = [
    # General
    ParameterDescriptor("animate", "General", bool),
    ParameterDescriptor("show_diagnostics", "General", bool),
    ParameterDescriptor("draw_flowfield", "General", bool),
    # Flow field
    ParameterDescriptor("wraparound", "Flow Field", bool, restarts=True),
    ParameterDescriptor("cells", "Flow Field", int, restarts=True),
    ParameterDescriptor("octaves", "Flow Field", int, restarts=True),
    ParameterDescriptor("falloff", "Flow Field", float, restarts=True),
    ParameterDescriptor("xy_increment", "Flow Field", float),
    ParameterDescriptor("z_increment", "Flow Field", float),
    # Particles
    ParameterDescriptor("count", "Particles", int, restarts=True),
    ParameterDescriptor("point_size", "Particles", int),
    ParameterDescriptor("min_speed", "Particles", float),
    ParameterDescriptor("max_speed", "Particles", float),
    ParameterDescriptor("min_life_seconds", "Particles", float),
    ParameterDescriptor("max_life_seconds", "Particles", float),
    ParameterDescriptor("alpha", "Particles", float),
    ParameterDescriptor("fancy_colors", "Particles", bool, restarts=True),
    ParameterDescriptor("fancy_color_range", "Particles", int),
    ParameterDescriptor("static_color", "Particles", int),
]

_BY_NAME: Dict[str, ParameterDescriptor] = {p.name: p for p in PARAMETERS}


def get_parameter(name: str) -> ParameterDescriptor:
    """Get descriptor by name."""
    if name not in _BY_NAME:
        raise ValueError(f"Unknown parameter '{name}'. Available: {list(_BY_NAME.keys())}")
    return _BY_NAME[name]


def parameter_groups() -> Dict[str, List[ParameterDescriptor]]:
    """Descriptors grouped by panel section, in declaration order."""
    groups: Dict[str, List[ParameterDescriptor]] = {}
    for param in PARAMETERS:
        groups.setdefault(param.group, []).append(param)
    return groups
