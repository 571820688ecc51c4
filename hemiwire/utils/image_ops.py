from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

RGB = Tuple[int, int, int]


def clamp01(x: np.ndarray | float) -> np.ndarray | float:
    return np.clip(x, 0.0, 1.0)


def hex_to_rgb(color: str) -> RGB:
    c = color.lstrip("#")
    if len(c) == 3:
        c = "".join(ch * 2 for ch in c)
    if len(c) != 6:
        raise ValueError(f"Not a hex colour: {color!r}")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*(int(v) for v in rgb[:3]))


def lerp_color(t: float, color_stops: Sequence[RGB]) -> RGB:
    """Colour at ``t`` in [0, 1] along evenly spaced stops."""
    t = float(clamp01(t))
    segments = len(color_stops) - 1
    if segments <= 0:
        return tuple(int(v) for v in color_stops[0])
    seg = int(min(segments - 1, math.floor(t * segments)))
    seg_w = 1.0 / segments
    local_t = (t - seg * seg_w) / seg_w
    c1 = color_stops[seg]
    c2 = color_stops[seg + 1]
    return (
        int(c1[0] + (c2[0] - c1[0]) * local_t),
        int(c1[1] + (c2[1] - c1[1]) * local_t),
        int(c1[2] + (c2[2] - c1[2]) * local_t),
    )
