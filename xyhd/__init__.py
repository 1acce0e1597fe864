# xyhd - flat grid world with XY position and head direction, for
# training pattern-learning models on egocentric sensory streams.

__version__ = "0.1.0"

from .config import XYHDConfig, load_config
from .env import XYHDEnv

__all__ = ["XYHDConfig", "load_config", "XYHDEnv"]
