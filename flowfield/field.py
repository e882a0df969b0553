"""Flow field: a grid of unit direction vectors sampled from coherent noise."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

import numpy as np

from .noise import PerlinNoise


@dataclass
class VectorField:
    """Row-major ``cells x cells`` grid of unit vectors; index = x + y * cells."""
    cells: int
    cell_scale_x: float
    cell_scale_y: float
    vectors: np.ndarray  # Shape (cells * cells, 2)
    z_offset: float = 0.0

    def vector_at(self, x: int, y: int) -> np.ndarray:
        return self.vectors[x + y * self.cells]


def axis_offsets(cells: int, xy_increment: float, wraparound: bool) -> List[float]:
    """
    Noise offsets along one grid axis.

    The offset for index ``i`` is the running sum of the increments of all
    previous indices. With ``wraparound`` the increment turns negative past the
    middle of the axis, so the sequence climbs and then walks back down and the
    field mirrors about the grid centre.
    """
    offsets = []
    off = 0.0
    for i in range(cells):
        offsets.append(off)
        if wraparound:
            off += xy_increment if i < cells / 2 else -xy_increment
        else:
            off += xy_increment
    return offsets


def generate_field(
    noise: PerlinNoise,
    width: float,
    height: float,
    cells: int,
    octaves: int,
    falloff: float,
    xy_increment: float,
    z_increment: float,
    wraparound: bool,
    z_offset: float = 0.0,
) -> VectorField:
    """
    Sample a fresh grid of unit vectors at depth ``z_offset``.

    Each noise value n in [0, 1) becomes the angle n * 4pi (two full turns).
    The returned field carries ``z_offset + z_increment`` so the next call
    continues where this one left off.
    """
    if cells < 1:
        raise ValueError(f"cells must be >= 1, got {cells}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")

    xoffs = np.array(axis_offsets(cells, xy_increment, wraparound))
    yoffs = np.array(axis_offsets(cells, xy_increment, wraparound))

    # Rows vary in y, columns in x -> ravel() yields index x + y * cells
    values = noise.sample(xoffs[np.newaxis, :], yoffs[:, np.newaxis], z_offset,
                          octaves=octaves, falloff=falloff)
    angles = values.ravel() * 4.0 * math.pi
    vectors = np.column_stack((np.cos(angles), np.sin(angles)))

    return VectorField(
        cells=cells,
        cell_scale_x=width / cells,
        cell_scale_y=height / cells,
        vectors=vectors,
        z_offset=z_offset + z_increment,
    )

