"""4x4 homogeneous rotation matrices.

Matrices are immutable: ``rotate_x``/``rotate_z`` return a new matrix equal to
``self @ R``, so the new rotation acts first, in the object's local frame::

    perspective = Matrix4.identity().rotate_x(tilt).rotate_z(0.0)
    perspective = perspective.rotate_z(0.002)   # once per frame
"""

from __future__ import annotations

import math

import numpy as np


class Matrix4:
    __slots__ = ("m",)

    def __init__(self, data=None):
        m = np.eye(4) if data is None else np.array(data, dtype=float)
        if m.shape != (4, 4):
            raise ValueError(f"Matrix4 needs a 4x4 array, got shape {m.shape}")
        m.setflags(write=False)
        self.m = m

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls()

    @classmethod
    def rotation_x(cls, rad: float) -> "Matrix4":
        c = math.cos(rad)
        s = math.sin(rad)
        return cls([
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def rotation_z(cls, rad: float) -> "Matrix4":
        c = math.cos(rad)
        s = math.sin(rad)
        return cls([
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    def rotate_x(self, rad: float) -> "Matrix4":
        return self @ Matrix4.rotation_x(rad)

    def rotate_z(self, rad: float) -> "Matrix4":
        return self @ Matrix4.rotation_z(rad)

    def __matmul__(self, other: "Matrix4") -> "Matrix4":
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4(self.m @ other.m)

    def apply(self, point: np.ndarray) -> np.ndarray:
        """Multiply (x, y, z, 1) by the matrix; returns the homogeneous 4-vector."""
        p = np.ones(4)
        p[:3] = point
        return self.m @ p

    def apply_many(self, points: np.ndarray) -> np.ndarray:
        """Transform an (N, 3) array of points; returns the (N, 3) xyz part."""
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        return pts @ self.m[:3, :3].T + self.m[:3, 3]

    def as_array(self) -> np.ndarray:
        return self.m

    def isclose(self, other: "Matrix4", tol: float = 1e-9) -> bool:
        return bool(np.allclose(self.m, other.m, rtol=0.0, atol=tol))

    def __repr__(self) -> str:
        return f"Matrix4({self.m.tolist()})"
