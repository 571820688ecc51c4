"""hemiwire - noise-deformed hemisphere wireframe animation.

Subpackages:
- core: vectors, matrices, camera, mesh builder and animator
- utils: Pillow drawing and colour helpers

The Qt viewer lives in ``hemiwire.viewer`` and is imported on demand.
"""

__version__ = "0.1.0"
