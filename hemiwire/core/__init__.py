"""Geometry and animation core for hemiwire.

Modules:
- vector, matrix, angles: small linear algebra
- noise: seeded value noise + remap
- camera: orthographic projection
- mesh: hemisphere grid builder
- animator: per-frame update producing draw commands
"""

from .errors import HemiwireError, InvalidDimension, InvalidGridSpec
from .vector import Vector
from .matrix import Matrix4
from .camera import OrthographicCamera
from .noise import NoiseSampler, ValueNoise, remap
from .mesh import GridSpec, HemisphereMesh, build_hemisphere, grid, spherical_to_cartesian
from .animator import AnimationState, Animator, Frame, FrameGate, create_animator

__all__ = [
    "HemiwireError",
    "InvalidDimension",
    "InvalidGridSpec",
    "Vector",
    "Matrix4",
    "OrthographicCamera",
    "NoiseSampler",
    "ValueNoise",
    "remap",
    "GridSpec",
    "HemisphereMesh",
    "build_hemisphere",
    "grid",
    "spherical_to_cartesian",
    "AnimationState",
    "Animator",
    "Frame",
    "FrameGate",
    "create_animator",
]
