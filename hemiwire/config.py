"""
Scene constants for the hemisphere animation.

Everything here is fixed at process start. ``SceneParams`` bundles the same
values so a scene (or a test) can be built from a single object.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Noise output is remapped from [-1, 1] into this height range.
NOISE_RANGE: Tuple[float, float] = (0.0, 3.0)
# Height range mapped onto the palette for face colours.
COLOR_RANGE: Tuple[float, float] = (0.0, 1.0)

RADIUS: float = 10.0

# Coarse and fine spatial noise resolutions.
RESOLUTIONS: Tuple[float, float] = (0.6, 0.1)

# Logical frame rate of the animation, independent of the host refresh rate.
FPS: int = 30

GRID_START: Tuple[float, float] = (0.0, 0.0)
GRID_STOP: Tuple[float, float] = (90.0, 360.0)
GRID_STEP: Tuple[float, float] = (10.0, 10.0)

TIME_STEP: float = 0.02
SPIN_PER_FRAME: float = 0.002
TILT_DEGREES: float = 120.0

CANVAS_SIZE: Tuple[int, int] = (600, 600)
CAMERA_ZOOM: float = 0.04

LINE_COLOR: str = "#aaaaaa"
FADE_PALETTE_FLOOR: int = 9


@dataclass(frozen=True)
class SceneParams:
    noise_range: Tuple[float, float] = NOISE_RANGE
    color_range: Tuple[float, float] = COLOR_RANGE
    radius: float = RADIUS
    resolutions: Tuple[float, float] = RESOLUTIONS
    fps: int = FPS
    grid_start: Tuple[float, float] = GRID_START
    grid_stop: Tuple[float, float] = GRID_STOP
    grid_step: Tuple[float, float] = GRID_STEP
    time_step: float = TIME_STEP
    spin_per_frame: float = SPIN_PER_FRAME
    tilt_degrees: float = TILT_DEGREES
    canvas_size: Tuple[int, int] = CANVAS_SIZE
    camera_zoom: float = CAMERA_ZOOM
    line_color: str = LINE_COLOR
    palette_floor: int = FADE_PALETTE_FLOOR
