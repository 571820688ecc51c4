from __future__ import annotations

import numpy as np


def to_radians(degrees):
    return np.deg2rad(degrees) if isinstance(degrees, np.ndarray) else float(degrees) * np.pi / 180.0


def to_degrees(radians):
    return np.rad2deg(radians) if isinstance(radians, np.ndarray) else float(radians) * 180.0 / np.pi
