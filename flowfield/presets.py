"""Preset worlds and random world generation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from .config import DEFAULT_CONFIG, FlowFieldConfig


@dataclass
class Preset:
    """A named set of parameter overrides applied on top of a config."""
    name: str
    description: str
    overrides: Dict[str, Any] = field(default_factory=dict)

    def apply(self, config: FlowFieldConfig) -> FlowFieldConfig:
        return config.replace(**self.overrides)


# ============================================================================
# Preset Definitions
# ============================================================================

CLASSIC = Preset(
    name="classic",
    description="Default world: mirrored field, faint red trails",
    overrides={
        key: getattr(DEFAULT_CONFIG, key)
        for key in DEFAULT_CONFIG.as_dict()
        if key not in ("animate", "show_diagnostics", "draw_flowfield", "count", "seed")
    },
)

RAINBOW = Preset(
    name="rainbow",
    description="Hue follows heading across the full colour wheel",
    overrides={"fancy_colors": True, "fancy_color_range": 100, "alpha": 10.0},
)

DRIFT = Preset(
    name="drift",
    description="Slowly morphing field with long-lived particles",
    overrides={
        "z_increment": 0.0008,
        "min_life_seconds": 4.0,
        "max_life_seconds": 20.0,
        "fancy_colors": True,
        "fancy_color_range": 40,
    },
)

COARSE = Preset(
    name="coarse",
    description="Few large cells, fast particles, no mirroring",
    overrides={
        "wraparound": False,
        "cells": 12,
        "octaves": 2,
        "falloff": 0.4,
        "xy_increment": 0.15,
        "min_speed": 4.0,
        "max_speed": 18.0,
        "point_size": 2,
    },
)

FINE = Preset(
    name="fine",
    description="Dense grid with detailed noise and slow particles",
    overrides={
        "cells": 200,
        "octaves": 8,
        "falloff": 0.5,
        "xy_increment": 0.02,
        "min_speed": 0.5,
        "max_speed": 3.0,
        "static_color": 60,
    },
)


# ============================================================================
# Preset Registry
# ============================================================================

PRESETS: Dict[str, Preset] = {
    "classic": CLASSIC,
    "rainbow": RAINBOW,
    "drift": DRIFT,
    "coarse": COARSE,
    "fine": FINE,
}


def list_presets() -> List[Preset]:
    """Return list of all available presets."""
    return list(PRESETS.values())


def get_preset(name: str) -> Preset:
    """Get preset by name."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]


# ============================================================================
# Random Worlds
# ============================================================================

def randomize_config(config: FlowFieldConfig, rng: np.random.RandomState) -> FlowFieldConfig:
    """
    Roll a new world.

    Field and particle look are re-drawn; host toggles, particle count and
    seed are kept from ``config``.
    """
    min_speed = rng.uniform(0.0, 3.0)
    min_life = rng.uniform(0.0, 3.0)
    return config.replace(
        # Flow field
        wraparound=bool(rng.randint(0, 2) == 0),
        cells=int(rng.randint(3, 100)),
        octaves=int(rng.randint(2, 8)),
        falloff=float(rng.uniform(0.1, 0.75)),
        xy_increment=float(rng.uniform(0.01, 0.2)),
        z_increment=float(rng.uniform(0.0001, 0.001)) if rng.randint(0, 4) == 1 else 0.0,
        # Particles
        point_size=int(rng.randint(1, 4)),
        min_speed=float(min_speed),
        max_speed=float(min_speed + rng.uniform(0.0, 10.0)),
        min_life_seconds=float(min_life),
        max_life_seconds=float(min_life + rng.uniform(0.0, 20.0)),
        alpha=float(rng.uniform(5.0, 15.0)),
        fancy_colors=bool(rng.randint(0, 2) == 0),
        fancy_color_range=int(rng.uniform(20.0, 100.0)),
        static_color=int(rng.uniform(0.0, 100.0)),
    )
