from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from ..config import SceneParams
from .angles import to_radians
from .camera import OrthographicCamera
from .matrix import Matrix4
from .mesh import GridSpec, HemisphereMesh, POINTS_PER_CELL, build_hemisphere
from .noise import NoiseSampler, ValueNoise, remap
from .palette import Palette, build_palette
from .vector import Vector

logger = logging.getLogger(__name__)

# Larger than any deformed height; starting value for the per-face minimum.
MIN_Z_START = 100.0

# Projected (x, y) position on the drawing surface.
Point2D = Tuple[float, float]


def js_round(x: float) -> int:
    """Round half up, as browser timers and the original animation did."""
    return int(math.floor(x + 0.5))


def opacity_at(t: float) -> float:
    return 0.5 * math.sin(0.5 * t) + 0.5


def resolution_index_at(t: float) -> int:
    return js_round(0.5 * math.sin((0.5 * t + 1.6) / 2) + 0.5)


class FrameGate:
    """Admits at most one update per logical frame of wall-clock time."""

    def __init__(self, fps: int, prev_tick: int = 0):
        self.fps = fps
        self.prev_tick = prev_tick

    def admit(self, now: float) -> bool:
        tick = js_round(self.fps * now)
        if tick == self.prev_tick:
            return False
        self.prev_tick = tick
        return True


@dataclass(frozen=True)
class LineCommand:
    start: Point2D
    end: Point2D
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class PolygonCommand:
    points: Tuple[Point2D, ...]
    fill: str
    stroke: str
    alpha: float = 1.0


DrawCommand = Union[LineCommand, PolygonCommand]


@dataclass
class Frame:
    t: float
    opacity: float
    resolution: float
    commands: List[DrawCommand] = field(default_factory=list)

    @property
    def lines(self) -> List[LineCommand]:
        return [c for c in self.commands if isinstance(c, LineCommand)]

    @property
    def polygons(self) -> List[PolygonCommand]:
        return [c for c in self.commands if isinstance(c, PolygonCommand)]


@dataclass
class AnimationState:
    t: float = 0.0
    dt: float = 0.02
    perspective: Matrix4 = field(default_factory=Matrix4.identity)
    prev_tick: int = 0


class Animator:
    """Owns the mesh and animation clock; turns each admitted tick into a Frame."""

    def __init__(
        self,
        mesh: HemisphereMesh,
        camera: OrthographicCamera,
        sampler: NoiseSampler,
        palette: Palette,
        params: SceneParams = SceneParams(),
        state: Optional[AnimationState] = None,
    ):
        self.mesh = mesh
        self.camera = camera
        self.sampler = sampler
        self.palette = palette
        self.params = params
        self.state = state if state is not None else AnimationState(dt=params.time_step)
        self.gate = FrameGate(params.fps, self.state.prev_tick)
        self._lines = np.array(mesh.lines, dtype=int).reshape(-1, 2)
        self._faces = np.array(mesh.faces, dtype=int).reshape(-1, 4)
        self._surface = np.array(
            [i + j for i in range(0, len(mesh.points), POINTS_PER_CELL) for j in range(4)], dtype=int
        )

    def tick(self, now: float) -> Optional[Frame]:
        """Gate on wall-clock ``now`` (seconds); None when the frame is skipped."""
        if not self.gate.admit(now):
            return None
        self.state.prev_tick = self.gate.prev_tick
        return self.render()

    def step(self, frames: int = 1) -> List[Frame]:
        return [self.render() for _ in range(frames)]

    def render(self) -> Frame:
        state = self.state
        state.perspective = state.perspective.rotate_z(self.params.spin_per_frame)

        opacity = opacity_at(state.t)
        resolution = self.params.resolutions[resolution_index_at(state.t)]

        # one array pass per frame; commands index into it
        world = self.point_array()
        screen = self.camera.project_many(state.perspective.apply_many(world))

        frame = Frame(t=state.t, opacity=opacity, resolution=resolution)
        frame.commands.extend(self._line_commands(world, screen, opacity))
        frame.commands.extend(self._face_commands(world, screen, opacity))

        self._redeform(world, state.t, resolution)
        state.t += state.dt
        return frame

    def point_array(self) -> np.ndarray:
        """Mesh points stacked into an (N, 3) array."""
        return np.array([p.as_array() for p in self.mesh.points])

    def project(self, point: Vector) -> Vector:
        """Single-point form of the per-frame projection."""
        return self.camera.project(point.transform(self.state.perspective))

    def _line_commands(self, world: np.ndarray, screen: np.ndarray, opacity: float) -> List[LineCommand]:
        lines = self._lines
        k = np.arange(len(lines))
        faded = (k > self.mesh.fade_threshold) & (world[lines[:, 1], 2] > 0) & (k % 3 != 1)
        alphas = np.where(faded, opacity, 1.0)
        color = self.params.line_color
        return [
            LineCommand(tuple(start), tuple(end), color, alpha)
            for start, end, alpha in zip(
                screen[lines[:, 0]].tolist(), screen[lines[:, 1]].tolist(), alphas.tolist()
            )
        ]

    def _face_commands(self, world: np.ndarray, screen: np.ndarray, opacity: float) -> List[PolygonCommand]:
        faces = self._faces
        palette = self.palette
        size = len(palette)
        floor = self.params.palette_floor
        min_z = np.minimum(MIN_Z_START, world[faces, 2].min(axis=1))
        color_index = np.floor(remap(min_z, self.params.color_range, (0, size))).astype(int)
        commands = []
        for corners, ci in zip(screen[faces].tolist(), color_index.tolist()):
            commands.append(PolygonCommand(
                tuple(map(tuple, corners)), palette[max(ci, floor)], palette[size - ci], opacity
            ))
        return commands

    def _redeform(self, world: np.ndarray, t: float, resolution: float) -> None:
        points = self.mesh.points
        surface = self._surface
        deformed = world[surface].copy()
        deformed[:, 2] = self.sampler.sample(deformed[:, 0], deformed[:, 1], t, resolution)
        for k, xyz in zip(surface.tolist(), deformed):
            points[k] = Vector(xyz)


def create_animator(params: Optional[SceneParams] = None, seed: Optional[float] = None) -> Animator:
    """Build the default scene: seeded noise, camera, tilted perspective and mesh at t=0."""
    params = params or SceneParams()
    noise = ValueNoise(seed)
    sampler = NoiseSampler(noise, params.noise_range)

    width, height = params.canvas_size
    camera = OrthographicCamera(
        position=Vector.from_sequence([0, 0, 0]),
        direction=Vector.zeroes(),
        up=Vector.from_sequence([0, 1, 0]),
        width=width,
        height=height,
        zoom=params.camera_zoom,
    )
    perspective = (
        Matrix4.identity()
        .rotate_x(to_radians(params.tilt_degrees))
        .rotate_z(to_radians(0))
    )

    spec = GridSpec(params.grid_start, params.grid_stop, params.grid_step)
    mesh = build_hemisphere(spec, params.radius, sampler, params.resolutions[0], t=0.0)
    palette = Palette(build_palette())

    state = AnimationState(t=0.0, dt=params.time_step, perspective=perspective)
    logger.info("Animator ready: %d lines, %d faces, fade threshold %d",
                len(mesh.lines), len(mesh.faces), mesh.fade_threshold)
    return Animator(mesh, camera, sampler, palette, params, state)
