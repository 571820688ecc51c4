"""Small fixed-size vectors (2D screen points and 3D mesh vertices)."""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np

from .errors import InvalidDimension

SUPPORTED_DIMENSIONS = (2, 3)


class Vector:
    """Immutable 2- or 3-component float vector."""

    __slots__ = ("_v",)

    def __init__(self, components: Iterable[float]):
        arr = np.array(list(components) if not isinstance(components, np.ndarray) else components, dtype=float)
        if arr.ndim != 1 or arr.size not in SUPPORTED_DIMENSIONS:
            raise InvalidDimension(
                f"Vector needs {' or '.join(map(str, SUPPORTED_DIMENSIONS))} components, got shape {arr.shape}"
            )
        arr.setflags(write=False)
        self._v = arr

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "Vector":
        return cls(values)

    @classmethod
    def zeroes(cls, dimension: int = 3) -> "Vector":
        if dimension not in SUPPORTED_DIMENSIONS:
            raise InvalidDimension(f"Unsupported vector dimension {dimension}")
        return cls(np.zeros(dimension))

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        if self._v.size < 3:
            raise InvalidDimension("2D vector has no z component")
        return float(self._v[2])

    @property
    def dimension(self) -> int:
        return int(self._v.size)

    def as_array(self) -> np.ndarray:
        return self._v

    def __len__(self) -> int:
        return int(self._v.size)

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._v)

    def __getitem__(self, index: int) -> float:
        return float(self._v[index])

    def _check(self, other: "Vector") -> np.ndarray:
        if not isinstance(other, Vector):
            other = Vector(other)
        if other._v.size != self._v.size:
            raise InvalidDimension(
                f"Dimension mismatch: {self._v.size} vs {other._v.size}"
            )
        return other._v

    def __add__(self, other) -> "Vector":
        return Vector(self._v + self._check(other))

    def __sub__(self, other) -> "Vector":
        return Vector(self._v - self._check(other))

    def __mul__(self, scalar: float) -> "Vector":
        if isinstance(scalar, Vector):
            return NotImplemented
        return Vector(self._v * float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self._v / float(scalar))

    def __neg__(self) -> "Vector":
        return Vector(-self._v)

    def dot(self, other) -> float:
        return float(np.dot(self._v, self._check(other)))

    def cross(self, other) -> "Vector":
        o = self._check(other)
        if self._v.size != 3:
            raise InvalidDimension("cross product needs 3D vectors")
        return Vector(np.cross(self._v, o))

    def magnitude(self) -> float:
        return float(np.linalg.norm(self._v))

    def normalize(self) -> "Vector":
        m = self.magnitude()
        if m == 0:
            return Vector(np.zeros_like(self._v))
        return Vector(self._v / m)

    def transform(self, matrix) -> "Vector":
        """Apply a 4x4 homogeneous transform to (x, y, z, 1); returns a 3D vector.

        No perspective divide: the matrices used here are pure rotations, so w stays 1.
        """
        if self._v.size != 3:
            raise InvalidDimension("transform needs a 3D vector")
        return Vector(matrix.apply(self._v)[:3])

    def isclose(self, other, tol: float = 1e-9) -> bool:
        o = self._check(other)
        return bool(np.allclose(self._v, o, rtol=0.0, atol=tol))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._v.size == other._v.size and bool(np.array_equal(self._v, other._v))

    def __hash__(self) -> int:
        return hash(tuple(self._v.tolist()))

    def __repr__(self) -> str:
        return f"Vector({', '.join(f'{c:.4f}' for c in self._v)})"
