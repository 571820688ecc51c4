import numpy as np
import pytest

from hemiwire.config import SceneParams
from hemiwire.core.mesh import GridSpec


class ConstantNoise:
    """Noise stand-in that returns the same value everywhere."""

    def __init__(self, value: float):
        self.value = value

    def __call__(self, x, y, t):
        if np.isscalar(x):
            return self.value
        return np.full(np.shape(x), self.value, dtype=float)


@pytest.fixture
def constant_noise():
    return ConstantNoise


@pytest.fixture
def small_spec():
    # 3 theta bands (0, 10, 20) x 3 phi steps; last band is theta=10
    return GridSpec((0.0, 0.0), (20.0, 20.0), (10.0, 10.0))


@pytest.fixture
def small_params(small_spec):
    return SceneParams(grid_start=small_spec.start, grid_stop=small_spec.stop, grid_step=small_spec.step)
