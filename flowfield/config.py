"""Configuration for the flow field simulation."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FlowFieldConfig(BaseModel):
    """Validated parameter snapshot. Immutable; use ``replace`` to derive a new one."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # General
    animate: bool = True
    show_diagnostics: bool = False
    draw_flowfield: bool = False

    # Flow field
    wraparound: bool = True
    cells: int = Field(default=100, ge=1, le=200)
    octaves: int = Field(default=4, ge=1, le=10)
    falloff: float = Field(default=0.65, ge=0.0, le=1.0)
    xy_increment: float = Field(default=0.05, ge=0.0, le=0.2)
    z_increment: float = Field(default=0.0, ge=0.0, le=0.05)

    # Particles
    count: int = Field(default=1000, ge=1, le=5000)
    point_size: int = Field(default=1, ge=1, le=10)
    min_speed: float = Field(default=2.0, ge=0.0, le=5.0)
    max_speed: float = Field(default=10.0, ge=0.0, le=25.0)
    min_life_seconds: float = Field(default=1.0, ge=0.0, le=5.0)
    max_life_seconds: float = Field(default=5.0, ge=0.0, le=30.0)
    alpha: float = Field(default=7.0, ge=1.0, le=100.0)
    fancy_colors: bool = False
    fancy_color_range: int = Field(default=100, ge=0, le=100)
    static_color: int = Field(default=0, ge=0, le=100)

    # Random source for spawns, randomize and the noise table
    seed: Optional[int] = None

    def replace(self, **changes: Any) -> "FlowFieldConfig":
        """Return a new validated config with ``changes`` applied."""
        data = self.model_dump()
        data.update(changes)
        return FlowFieldConfig(**data)

    def as_dict(self) -> dict:
        return self.model_dump()


DEFAULT_CONFIG = FlowFieldConfig()
