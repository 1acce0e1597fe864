from dataclasses import dataclass, field, fields
import os

import yaml


@dataclass
class XYHDConfig:
    # World
    WORLD_SIZE: tuple = (5, 5)     # (X, Y)
    MATS: list = field(default_factory=lambda: ["Empty", "Wall"])
    BARRIER_IDX: int = 1           # mats in (0, BARRIER_IDX] block movement
    ACTS: list = field(default_factory=lambda: ["Left", "Right", "Forward"])

    # Kinematics
    ANG_INC: int = 90              # rotation increment, degrees

    # Rendered pattern sizes
    PAT_SIZE: tuple = (5, 5)       # (X, Y) of material / action patterns
    POS_SIZE: tuple = (16, 16)     # (X, Y) of the 2D position code
    RING_SIZE: int = 16            # units in the angle ring code
    POP_SIZE: int = 12             # units in the vestibular 1D code
    PAT_PCT_ON: float = 0.25       # fraction of units on in default patterns

    # Population code ranges
    POP_MIN: float = -0.2
    POP_MAX: float = 1.2
    POP_SIGMA: float = 0.1
    RING_MIN: float = 0.0
    RING_MAX: float = 1.0
    RING_SIGMA: float = 0.1
    POS_MIN: float | None = None   # None -> 1 / (WORLD_SIZE[0] - 2)
    POS_MAX: float = 1.0
    POS_SIGMA: float = 0.2

    # Counters
    TRIAL_MAX: int = 300           # trials per epoch
    EPOCH_MAX: int = 0             # 0 = unbounded, caller stops runs
    RUN_MAX: int = 1

    # Debugging
    TRACE_ACT_GEN: bool = False
    SEED: int | None = None

    @property
    def pos_min(self) -> float:
        if self.POS_MIN is not None:
            return self.POS_MIN
        return 1.0 / (self.WORLD_SIZE[0] - 2)


_TUPLE_FIELDS = ("WORLD_SIZE", "PAT_SIZE", "POS_SIZE")


def load_config(path: str = "config.yaml") -> XYHDConfig:
    """Load configuration from YAML, filter to XYHDConfig fields."""
    cfg = XYHDConfig()
    if os.path.exists(path):
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        valid = {f.name for f in fields(XYHDConfig)}
        filtered = {k: v for k, v in raw.items() if k in valid}
        for k in _TUPLE_FIELDS:
            if k in filtered:
                filtered[k] = tuple(filtered[k])
        cfg = XYHDConfig(**filtered)
    return cfg
