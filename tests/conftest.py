# tests/conftest.py
import numpy as np
import pytest

from xyhd.config import XYHDConfig
from xyhd.env import XYHDEnv
from xyhd.world.grid import WorldGrid


@pytest.fixture
def world():
    """5x5 world with a one-cell wall ring (Wall = 1), center clear."""
    w = WorldGrid((5, 5), ["Empty", "Wall"], barrier_idx=1)
    w.gen_world()
    return w


@pytest.fixture
def rng():
    return np.random.RandomState(42)


@pytest.fixture
def cfg():
    return XYHDConfig(SEED=7, TRIAL_MAX=10)


@pytest.fixture
def env(cfg):
    return XYHDEnv(cfg)
