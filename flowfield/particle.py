"""A single particle steered by the flow field."""
from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np

from .config import FlowFieldConfig

SATURATION = 80.0
BRIGHTNESS = 100.0


class SpawnParams(NamedTuple):
    """Canvas size and the ranges a particle draws its limits from."""
    width: float
    height: float
    min_speed: float
    max_speed: float
    min_life_seconds: float
    max_life_seconds: float

    @classmethod
    def from_config(cls, config: FlowFieldConfig, width: float, height: float) -> "SpawnParams":
        return cls(
            width=width,
            height=height,
            min_speed=config.min_speed,
            max_speed=config.max_speed,
            min_life_seconds=config.min_life_seconds,
            max_life_seconds=config.max_life_seconds,
        )


class PointSprite(NamedTuple):
    """One point to draw. Colour channels use a 0-100 HSB scale."""
    x: float
    y: float
    hue: float
    saturation: float
    brightness: float
    alpha: float
    size: int

    def rgba(self) -> Tuple[int, int, int, int]:
        # Hue 100 is a full turn, same as hue 0
        hue = (self.hue / 100.0) % 1.0
        rgb = colorsys.hsv_to_rgb(hue, self.saturation / 100.0, self.brightness / 100.0)
        r, g, b = (int(round(c * 255)) for c in rgb)
        return r, g, b, int(round(self.alpha / 100.0 * 255))


@dataclass
class Particle:
    """Position, velocity and remaining life (milliseconds) of one particle."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    max_speed: float = 0.0
    max_life: float = 0.0
    life: float = 0.0

    @classmethod
    def spawn(cls, spawn: SpawnParams, rng: np.random.RandomState) -> "Particle":
        particle = cls()
        particle.initialize(spawn, rng)
        return particle

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def heading(self) -> float:
        """Velocity angle in [-pi, pi]."""
        return math.atan2(self.vy, self.vx)

    def initialize(self, spawn: SpawnParams, rng: np.random.RandomState) -> None:
        """Place the particle at a random point at rest with freshly drawn limits."""
        self.x = float(rng.uniform(0.0, spawn.width))
        self.y = float(rng.uniform(0.0, spawn.height))
        self.vx = 0.0
        self.vy = 0.0
        self.max_speed = float(rng.uniform(spawn.min_speed, spawn.max_speed))
        self.max_life = float(rng.uniform(spawn.min_life_seconds, spawn.max_life_seconds)) * 1000.0
        self.life = self.max_life

    def cell_index(self, cell_scale_x: float, cell_scale_y: float, cells: int) -> int:
        """Index of the grid cell under the particle, clamped onto the grid."""
        cx = min(max(int(math.floor(self.x / cell_scale_x)), 0), cells - 1)
        cy = min(max(int(math.floor(self.y / cell_scale_y)), 0), cells - 1)
        return cx + cy * cells

    def update(
        self,
        delta_time_ms: float,
        vectors: np.ndarray,
        cell_scale_x: float,
        cell_scale_y: float,
        cells: int,
        spawn: SpawnParams,
        rng: np.random.RandomState,
    ) -> bool:
        """
        Age the particle and move it one frame along the field.

        A particle whose life drops below zero is respawned and does not move
        this frame: it keeps the zero velocity and fresh position from
        ``initialize``.

        Returns:
            True if the particle was respawned.
        """
        self.life -= delta_time_ms
        if self.life < 0:
            self.initialize(spawn, rng)
            return True

        steer_x, steer_y = vectors[self.cell_index(cell_scale_x, cell_scale_y, cells)]
        self.vx += float(steer_x)
        self.vy += float(steer_y)

        # Cap speed, keep direction
        speed = self.speed
        if speed > self.max_speed:
            scale = self.max_speed / speed
            self.vx *= scale
            self.vy *= scale

        self.x += self.vx
        self.y += self.vy

        self.wrap(spawn.width, spawn.height)
        return False

    def wrap(self, width: float, height: float) -> None:
        """Toroidal wraparound: leaving one edge re-enters at the opposite one."""
        if self.x < 0:
            self.x = width - 1
        elif self.x >= width:
            self.x = 0.0

        if self.y < 0:
            self.y = height - 1
        elif self.y >= height:
            self.y = 0.0

    def render(self, config: FlowFieldConfig) -> PointSprite:
        if config.fancy_colors:
            # Map heading [-pi, pi] onto [0, fancy_color_range]
            hue = (self.heading / math.pi + 1.0) / 2.0 * config.fancy_color_range
        else:
            hue = float(config.static_color)
        return PointSprite(
            x=self.x,
            y=self.y,
            hue=hue,
            saturation=SATURATION,
            brightness=BRIGHTNESS,
            alpha=config.alpha,
            size=config.point_size,
        )
