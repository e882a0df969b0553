"""Seedable coherent noise.

Classic Processing-style lattice noise: a table of 4096 random values is
addressed by packing the integer lattice coordinates into one offset and the
fractional parts are blended with a cosine curve. Octaves double the frequency
and scale the amplitude by ``falloff``. The result is normalised by the summed
octave amplitudes, so samples always fall in ``[0, 1)``.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

PERLIN_YWRAPB = 4
PERLIN_YWRAP = 1 << PERLIN_YWRAPB
PERLIN_ZWRAPB = 8
PERLIN_ZWRAP = 1 << PERLIN_ZWRAPB
PERLIN_SIZE = 4095


def _scaled_cosine(t: np.ndarray) -> np.ndarray:
    return 0.5 * (1.0 - np.cos(t * np.pi))


class PerlinNoise:
    """Deterministic multi-octave noise over 3D coordinates."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.RandomState] = None):
        if rng is None:
            rng = np.random.RandomState(seed)
        self.table = rng.random_sample(PERLIN_SIZE + 1)

    def sample(self, x, y, z=0.0, octaves: int = 4, falloff: float = 0.5) -> np.ndarray:
        """
        Sample noise at broadcastable coordinates.

        Args:
            x, y, z: Scalars or arrays; negative coordinates are mirrored.
            octaves: Number of layers of detail (>= 1).
            falloff: Amplitude factor applied per octave.

        Returns:
            Array of values in [0, 1) with the broadcast shape of the inputs.
        """
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")

        x, y, z = np.broadcast_arrays(
            np.abs(np.asarray(x, dtype=float)),
            np.abs(np.asarray(y, dtype=float)),
            np.abs(np.asarray(z, dtype=float)),
        )
        shape = x.shape
        x, y, z = x.ravel(), y.ravel(), z.ravel()

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        zi = np.floor(z).astype(np.int64)
        xf = x - xi
        yf = y - yi
        zf = z - zi

        table = self.table
        result = np.zeros(x.shape)
        amplitude = 0.5
        total = 0.0

        for _ in range(octaves):
            of = xi + (yi << PERLIN_YWRAPB) + (zi << PERLIN_ZWRAPB)

            rxf = _scaled_cosine(xf)
            ryf = _scaled_cosine(yf)

            # Near z plane
            n1 = table[of & PERLIN_SIZE]
            n1 = n1 + rxf * (table[(of + 1) & PERLIN_SIZE] - n1)
            n2 = table[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n2 = n2 + rxf * (table[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n2)
            n1 = n1 + ryf * (n2 - n1)

            # Far z plane
            of = of + PERLIN_ZWRAP
            n2 = table[of & PERLIN_SIZE]
            n2 = n2 + rxf * (table[(of + 1) & PERLIN_SIZE] - n2)
            n3 = table[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n3 = n3 + rxf * (table[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n3)
            n2 = n2 + ryf * (n3 - n2)

            n1 = n1 + _scaled_cosine(zf) * (n2 - n1)

            result += n1 * amplitude
            total += amplitude
            amplitude *= falloff

            xi, yi, zi = xi << 1, yi << 1, zi << 1
            xf, yf, zf = xf * 2.0, yf * 2.0, zf * 2.0
            for frac, whole in ((xf, xi), (yf, yi), (zf, zi)):
                carry = frac >= 1.0
                whole += carry
                frac -= carry

        return (result / total).reshape(shape)

    def __call__(self, x: float, y: float = 0.0, z: float = 0.0,
                 octaves: int = 4, falloff: float = 0.5) -> float:
        return float(self.sample(x, y, z, octaves, falloff))
