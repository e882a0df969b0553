"""Flow field simulation: one field, many particles, one step per frame."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, NamedTuple, Optional

import numpy as np

from .config import DEFAULT_CONFIG, FlowFieldConfig
from .field import VectorField, generate_field
from .noise import PerlinNoise
from .params import get_parameter
from .particle import Particle, PointSprite, SpawnParams
from .presets import get_preset, randomize_config

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    """Everything the renderer needs for one frame."""
    sprites: List[PointSprite]
    segments: Optional[np.ndarray] = None  # Shape (cells * cells, 2, 2)
    diagnostics: Optional[List[str]] = None


class SimulationContext:
    """
    Owns the configuration, the vector field and the particles.

    The host calls ``step`` once per display refresh. Within a step the field
    is advanced first and then every particle reads that same field, so no
    particle sees a half-written grid. ``restart`` builds the new field and
    particle set aside and swaps both in together; a lock keeps it from
    interleaving with a step running on another thread.
    """

    def __init__(
        self,
        config: FlowFieldConfig = DEFAULT_CONFIG,
        width: float = 800.0,
        height: float = 600.0,
        rng: Optional[np.random.RandomState] = None,
    ):
        _check_size(width, height)
        self.config = config
        self.width = float(width)
        self.height = float(height)

        self.rng = rng if rng is not None else np.random.RandomState(config.seed)
        self.noise = PerlinNoise(rng=self.rng)

        self._lock = threading.RLock()
        self.field: Optional[VectorField] = None
        self.particles: List[Particle] = []
        self.generation = 0
        self.frame_count = 0
        self.elapsed_ms = 0.0
        self.last_delta_ms = 0.0

        self.restart()

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def step(self, delta_time_ms: float) -> Frame:
        """Advance the field and every particle by one frame."""
        if delta_time_ms < 0:
            raise ValueError(f"delta_time_ms must be >= 0, got {delta_time_ms}")

        with self._lock:
            config = self.config
            sprites: List[PointSprite] = []
            self.last_delta_ms = delta_time_ms

            if config.animate:
                self.field = self._build_field(config, self.width, self.height,
                                               self.field.z_offset, config.z_increment)
                field = self.field
                spawn = SpawnParams.from_config(config, self.width, self.height)
                for particle in self.particles:
                    particle.update(delta_time_ms, field.vectors, field.cell_scale_x,
                                    field.cell_scale_y, field.cells, spawn, self.rng)
                    sprites.append(particle.render(config))
                self.frame_count += 1
                self.elapsed_ms += delta_time_ms

            segments = self.field_segments() if config.draw_flowfield else None
            diagnostics = self.diagnostics() if config.show_diagnostics else None

        return Frame(sprites=sprites, segments=segments, diagnostics=diagnostics)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def restart(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        """Rebuild the field from scratch and respawn every particle."""
        width = self.width if width is None else float(width)
        height = self.height if height is None else float(height)
        _check_size(width, height)

        with self._lock:
            config = self.config
            z_offset = self.field.z_offset if self.field is not None else 0.0
            field = self._build_field(config, width, height, z_offset, 0.0)
            logger.debug("Rebuilt %dx%d field at z=%.4f", field.cells, field.cells, z_offset)
            spawn = SpawnParams.from_config(config, width, height)
            particles = [Particle.spawn(spawn, self.rng) for _ in range(config.count)]

            self.width, self.height = width, height
            self.field = field
            self.particles = particles
            self.generation += 1

        logger.info(
            "Restarted world %d: %dx%d canvas, %d cells, %d particles",
            self.generation, int(width), int(height), config.cells, config.count,
        )

    def resize(self, width: float, height: float) -> None:
        logger.debug("Resize to %sx%s", width, height)
        self.restart(width, height)

    def randomize(self) -> None:
        """Roll a new random world and restart it."""
        with self._lock:
            self.config = randomize_config(self.config, self.rng)
            logger.info("Randomized world: %s", self.config.as_dict())
            self.restart()

    # A shake gesture re-rolls the world
    shake = randomize

    def apply_preset(self, name: str) -> None:
        preset = get_preset(name)
        with self._lock:
            self.config = preset.apply(self.config)
            logger.info("Applied preset '%s'", preset.name)
            self.restart()

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_parameter(self, name: str, value: Any) -> None:
        """Validate and apply one parameter; restart if the parameter requires it."""
        param = get_parameter(name)
        with self._lock:
            self.config = self.config.replace(**{name: value})
            if param.restarts:
                self.restart()

    def toggle(self, name: str) -> None:
        """Flip a boolean parameter."""
        param = get_parameter(name)
        param.set(self, not param.get(self))

    def toggle_animate(self) -> None:
        self.toggle("animate")

    def toggle_diagnostics(self) -> None:
        self.toggle("show_diagnostics")

    def toggle_flowfield(self) -> None:
        self.toggle("draw_flowfield")

    # ------------------------------------------------------------------
    # Side renders
    # ------------------------------------------------------------------

    def field_segments(self) -> np.ndarray:
        """
        One line per cell from the cell centre along the cell's direction.

        Returns:
            Array of shape (cells * cells, 2, 2): [start, end] points.
        """
        field = self.field
        cells = field.cells
        xs, ys = np.meshgrid(np.arange(cells), np.arange(cells))
        starts = np.column_stack((
            xs.ravel() * field.cell_scale_x + field.cell_scale_x / 2,
            ys.ravel() * field.cell_scale_y + field.cell_scale_y / 2,
        ))
        ends = starts + field.vectors * field.cell_scale_x
        return np.stack((starts, ends), axis=1)

    def diagnostics(self, fps: Optional[float] = None) -> List[str]:
        if fps is None:
            fps = 1000.0 / self.last_delta_ms if self.last_delta_ms > 0 else 0.0
        return [
            f"FPS:   {fps:.0f}",
            f"Count: {len(self.particles)}",
        ]

    def get_state(self) -> Dict[str, Any]:
        """Get current state for visualization or inspection."""
        with self._lock:
            return {
                "width": self.width,
                "height": self.height,
                "generation": self.generation,
                "frame": self.frame_count,
                "elapsed_ms": self.elapsed_ms,
                "cells": self.field.cells,
                "z_offset": self.field.z_offset,
                "particles": [
                    {
                        "id": i,
                        "x": p.x,
                        "y": p.y,
                        "vx": p.vx,
                        "vy": p.vy,
                        "life": p.life,
                        "max_life": p.max_life,
                    }
                    for i, p in enumerate(self.particles)
                ],
            }

    # ------------------------------------------------------------------

    def _build_field(self, config: FlowFieldConfig, width: float, height: float,
                     z_offset: float, z_increment: float) -> VectorField:
        return generate_field(
            self.noise,
            width,
            height,
            cells=config.cells,
            octaves=config.octaves,
            falloff=config.falloff,
            xy_increment=config.xy_increment,
            z_increment=z_increment,
            wraparound=config.wraparound,
            z_offset=z_offset,
        )


def _check_size(width: float, height: float) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Canvas must be at least 1x1, got {width}x{height}")
