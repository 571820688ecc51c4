"""Hemisphere mesh construction over a (theta, phi) parameter grid.

Each grid cell contributes 8 points: four noise-deformed "surface" corners
(``i..i+3``) followed by the same four corners undeformed (``i+4..i+7``).
Faces use the surface corners, wireframe lines use the undeformed ones
(plus the surface corners on the last theta band).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from .angles import to_radians
from .errors import InvalidGridSpec
from .noise import NoiseSampler
from .vector import Vector

logger = logging.getLogger(__name__)

POINTS_PER_CELL = 8
LAST_BAND_LINES = 3

Face = Tuple[int, int, int, int]
Line = Tuple[int, int]


@dataclass(frozen=True)
class GridSpec:
    start: Tuple[float, float] = (0.0, 0.0)
    stop: Tuple[float, float] = (90.0, 360.0)
    step: Tuple[float, float] = (10.0, 10.0)

    def __post_init__(self):
        for axis in (0, 1):
            if self.step[axis] <= 0:
                raise InvalidGridSpec(f"Grid step must be positive, got {self.step}")
            if self.stop[axis] < self.start[axis]:
                raise InvalidGridSpec(
                    f"Grid stop {self.stop} is before start {self.start}"
                )

    def _count(self, axis: int) -> int:
        span = (self.stop[axis] - self.start[axis]) / self.step[axis]
        return int(math.floor(span + 1e-9)) + 1

    @property
    def counts(self) -> Tuple[int, int]:
        return self._count(0), self._count(1)

    @property
    def spread(self) -> int:
        """Cells per theta band (one full phi sweep)."""
        return self._count(1)

    @property
    def cell_count(self) -> int:
        n_theta, n_phi = self.counts
        return n_theta * n_phi

    @property
    def last_band_theta(self) -> float:
        return self.stop[0] - self.step[0]


def grid(spec: GridSpec) -> Iterator[Tuple[float, float]]:
    """Yield (theta, phi) in degrees, theta-major, both endpoints inclusive."""
    n_theta, n_phi = spec.counts
    for a in range(n_theta):
        theta = spec.start[0] + a * spec.step[0]
        for b in range(n_phi):
            yield theta, spec.start[1] + b * spec.step[1]


def spherical_to_cartesian(radius: float, theta: float, phi: float) -> Vector:
    rsin = radius * math.sin(theta)
    return Vector((rsin * math.cos(phi), rsin * math.sin(phi), radius * math.cos(theta)))


@dataclass
class HemisphereMesh:
    points: List[Vector]
    faces: List[Face]
    lines: List[Line]
    spread: int
    cell_count: int
    fade_threshold: int = field(init=False)

    def __post_init__(self):
        # Lines past this index belong to the last theta band region that fades in and out.
        self.fade_threshold = len(self.lines) - self.spread * LAST_BAND_LINES + 2

    def __repr__(self):
        return (
            f"HemisphereMesh(points={len(self.points)}, faces={len(self.faces)}, "
            f"lines={len(self.lines)}, spread={self.spread}, fade_threshold={self.fade_threshold})"
        )


def _cell_corners(radius: float, theta: float, phi: float, step: Tuple[float, float]) -> List[Vector]:
    sub_theta = to_radians(theta - step[0] * 0.5)
    sup_theta = to_radians(theta + step[0] * 0.5)
    sub_phi = to_radians(phi - step[1] * 0.5)
    sup_phi = to_radians(phi + step[1] * 0.5)
    return [
        spherical_to_cartesian(radius, sub_theta, sup_phi),
        spherical_to_cartesian(radius, sub_theta, sub_phi),
        spherical_to_cartesian(radius, sup_theta, sup_phi),
        spherical_to_cartesian(radius, sup_theta, sub_phi),
    ]


def build_hemisphere(
    spec: GridSpec,
    radius: float,
    sampler: NoiseSampler,
    resolution: float,
    t: float = 0.0,
) -> HemisphereMesh:
    points: List[Vector] = []
    faces: List[Face] = []
    lines: List[Line] = []
    line_cells: List[int] = []
    last_band_cells = 0

    for cell, (theta, phi) in enumerate(grid(spec)):
        i = len(points)
        corners = _cell_corners(radius, theta, phi, spec.step)

        for x, y, z in corners:
            if z > 0:
                points.append(Vector((x, y, sampler.sample(x, y, t, resolution))))
            else:
                points.append(Vector((x, y, z)))

        faces.append((i, i + 1, i + 3, i + 2))
        points.extend(corners)

        if math.isclose(theta, spec.last_band_theta):
            last_band_cells += 1
            lines.append((i + 3, i + 5))
            lines.append((i + 4, i + 5))
            lines.append((i + 2, i + 3))
        else:
            lines.append((i + 4, i + 5))
            lines.append((i + 5, i + 7))
        line_cells.extend([cell] * (len(lines) - len(line_cells)))

    mesh = HemisphereMesh(points, faces, lines, spec.spread, spec.cell_count)
    check_topology(mesh, last_band_cells, line_cells)
    logger.info("Built %r", mesh)
    return mesh


def check_topology(mesh: HemisphereMesh, last_band_cells: int, line_cells: Sequence[int]) -> None:
    """Raise InvalidGridSpec unless counts match the grid and every face and
    line stays inside the eight points of the cell that emitted it.
    """
    expected_lines = 2 * mesh.cell_count + (LAST_BAND_LINES - 2) * last_band_cells
    if len(mesh.points) != POINTS_PER_CELL * mesh.cell_count or len(mesh.lines) != expected_lines:
        raise InvalidGridSpec(
            f"Mesh topology mismatch: {len(mesh.points)} points, {len(mesh.lines)} lines "
            f"for {mesh.cell_count} cells"
        )
    if last_band_cells not in (0, mesh.spread):
        raise InvalidGridSpec(f"Last theta band has {last_band_cells} cells, expected {mesh.spread}")
    if len(mesh.faces) != mesh.cell_count:
        raise InvalidGridSpec(f"Expected one face per cell, got {len(mesh.faces)} for {mesh.cell_count} cells")
    if len(line_cells) != len(mesh.lines):
        raise InvalidGridSpec(f"{len(line_cells)} line owners for {len(mesh.lines)} lines")
    owners = zip((*range(mesh.cell_count), *line_cells), (*mesh.faces, *mesh.lines))
    for cell, group in owners:
        if any(idx // POINTS_PER_CELL != cell for idx in group):
            first = cell * POINTS_PER_CELL
            raise InvalidGridSpec(f"{group} leaves cell {cell} (points {first}..{first + POINTS_PER_CELL - 1})")
