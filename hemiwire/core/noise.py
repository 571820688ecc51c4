from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

TABLE_SIZE = 256


def _fade(t):
    return t * t * (3.0 - 2.0 * t)


def remap(value, from_range: Sequence[float], to_range: Sequence[float]):
    """Linearly map ``value`` from ``from_range`` onto ``to_range`` (no clamping)."""
    lo1, hi1 = float(from_range[0]), float(from_range[1])
    lo2, hi2 = float(to_range[0]), float(to_range[1])
    if lo1 == hi1:
        # degenerate source: only the identity mapping is meaningful
        if (lo1, hi1) == (lo2, hi2):
            return value
        return lo2 + value * 0.0
    return lo2 + (value - lo1) * (hi2 - lo2) / (hi1 - lo1)


class ValueNoise:
    """Seeded 3D value noise returning values in [-1, 1].

    Lattice values are uniform in [-1, 1] and blended with a smoothstep-faded
    trilinear interpolation, so every sample is a convex combination of lattice
    values. Accepts scalars or numpy arrays.
    """

    def __init__(self, seed: Optional[float] = None):
        self._perm = None
        self._values = None
        self.seed(seed)

    def seed(self, value: Optional[float] = None) -> None:
        if value is None:
            value = np.random.default_rng().random()
        if isinstance(value, float) and 0.0 < value < 1.0:
            value *= 65536
        seed_int = int(np.floor(abs(value)))
        rng = np.random.default_rng(seed_int)
        perm = rng.permutation(TABLE_SIZE)
        self._perm = np.concatenate((perm, perm))
        self._values = rng.uniform(-1.0, 1.0, TABLE_SIZE)
        logger.debug("Noise seeded with %d", seed_int)

    def _lattice(self, ix, iy, iz):
        p = self._perm
        return self._values[p[p[p[ix] + iy] + iz]]

    def noise(self, x, y, t):
        scalar = np.isscalar(x) and np.isscalar(y) and np.isscalar(t)
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        t = np.asarray(t, dtype=float)

        x0 = np.floor(x)
        y0 = np.floor(y)
        z0 = np.floor(t)
        fx = _fade(x - x0)
        fy = _fade(y - y0)
        fz = _fade(t - z0)

        mask = TABLE_SIZE - 1
        ix = x0.astype(np.int64) & mask
        iy = y0.astype(np.int64) & mask
        iz = z0.astype(np.int64) & mask
        jx = (ix + 1) & mask
        jy = (iy + 1) & mask
        jz = (iz + 1) & mask

        c000 = self._lattice(ix, iy, iz)
        c100 = self._lattice(jx, iy, iz)
        c010 = self._lattice(ix, jy, iz)
        c110 = self._lattice(jx, jy, iz)
        c001 = self._lattice(ix, iy, jz)
        c101 = self._lattice(jx, iy, jz)
        c011 = self._lattice(ix, jy, jz)
        c111 = self._lattice(jx, jy, jz)

        x00 = c000 + (c100 - c000) * fx
        x10 = c010 + (c110 - c010) * fx
        x01 = c001 + (c101 - c001) * fx
        x11 = c011 + (c111 - c011) * fx
        y0v = x00 + (x10 - x00) * fy
        y1v = x01 + (x11 - x01) * fy
        out = np.clip(y0v + (y1v - y0v) * fz, -1.0, 1.0)
        return float(out) if scalar else out

    __call__ = noise


class NoiseSampler:
    """Turns a 2D position, time and spatial resolution into a vertex height."""

    def __init__(self, noise: ValueNoise, noise_range: Sequence[float]):
        self.noise = noise
        self.noise_range = tuple(noise_range)

    def sample(self, x, y, t: float, resolution: float):
        return remap(self.noise(x * resolution, y * resolution, t), (-1.0, 1.0), self.noise_range)
