from __future__ import annotations

import numpy as np

from .vector import Vector


class OrthographicCamera:
    """Orthographic projector from world space onto drawing-surface pixels.

    A zero ``direction`` means "look down -z": world x is right and ``up``,
    with its x component removed, is up. World units are divided by ``zoom``
    to get pixels, and surface y grows downward.
    """

    def __init__(self, position: Vector, direction: Vector, up: Vector, width: int, height: int, zoom: float):
        if zoom <= 0:
            raise ValueError(f"Camera zoom must be positive, got {zoom}")
        self.position = position
        self.direction = direction
        self.up = up
        self.width = width
        self.height = height
        self.zoom = float(zoom)
        self._right, self._up = self._basis()

    def _basis(self):
        if self.direction.magnitude() == 0:
            right = np.array([1.0, 0.0, 0.0])
            up = self.up.as_array()
            true_up = up - np.dot(up, right) * right
        else:
            forward = self.direction.normalize()
            right = forward.cross(self.up).normalize().as_array()
            true_up = np.cross(right, forward.as_array())
        length = np.linalg.norm(true_up)
        if length == 0:
            raise ValueError(f"Camera up {self.up} is parallel to the view axes")
        return right, true_up / length

    def project(self, point: Vector) -> Vector:
        return Vector(self.project_many(point.as_array())[0])

    def project_many(self, points: np.ndarray) -> np.ndarray:
        """Project an (N, 3) array of world points to (N, 2) surface pixels."""
        d = np.asarray(points, dtype=float).reshape(-1, 3) - self.position.as_array()
        sx = self.width * 0.5 + (d @ self._right) / self.zoom
        sy = self.height * 0.5 - (d @ self._up) / self.zoom
        return np.column_stack((sx, sy))

    def __repr__(self):
        return (
            f"OrthographicCamera(position={self.position}, direction={self.direction}, "
            f"up={self.up}, width={self.width}, height={self.height}, zoom={self.zoom})"
        )
