"""Agent kinematics: continuous pose, grid rounding, rotation and movement.

Headings are integer degrees measured from the +X axis, with positive
rotation toward +Y ("Left"). Heading vectors are max-norm normalized so that
every forward step crosses exactly one grid cell along the dominant axis,
whatever the angle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..world.grid import WorldGrid

LEFT = "Left"
RIGHT = "Right"
FORWARD = "Forward"

_VEC_EPS = 1e-7


def ang_mod(ang: int) -> int:
    """Wrap an angle into [0, 360)."""
    return ang % 360


def norm_vec_line(v: np.ndarray) -> np.ndarray:
    """Scale v so its largest absolute component is exactly 1."""
    v = np.asarray(v, dtype=float)
    av = np.abs(v)
    if av[0] > av[1]:
        v = v / av[0]
    else:
        v = v / av[1]
    v[np.abs(v) < _VEC_EPS] = 0.0
    return v


def heading_vector(ang: int) -> np.ndarray:
    """Incremental step vector for the given angle, in degrees."""
    a = np.deg2rad(ang_mod(ang))
    return norm_vec_line(np.array([np.cos(a), np.sin(a)]))


def round_point(p) -> tuple:
    """Nearest integer grid point, rounding halves away from zero."""
    p = np.asarray(p, dtype=float)
    r = np.sign(p) * np.floor(np.abs(p) + 0.5)
    return int(r[0]), int(r[1])


def next_vec_point(cp, v) -> tuple[np.ndarray, tuple]:
    """Next point along v from cp, as (float point, integer grid point)."""
    n = np.asarray(cp, dtype=float) + v
    return n, round_point(n)


@dataclass
class AgentPose:
    """Where the agent is and which way it faces."""
    pos_f: np.ndarray = field(default_factory=lambda: np.zeros(2))
    pos_i: tuple = (0, 0)
    angle: int = 0
    rot_ang: int = 0   # last rotation delta, drives the vestibular channel

    @classmethod
    def at(cls, pos: tuple, angle: int = 0) -> "AgentPose":
        return cls(pos_f=np.array(pos, dtype=float), pos_i=(int(pos[0]), int(pos[1])),
                   angle=ang_mod(angle))

    def rotate(self, direction: str, ang_inc: int) -> int:
        """Turn one increment Left (+) or Right (-). Position never changes."""
        if direction == LEFT:
            delta = ang_inc
        elif direction == RIGHT:
            delta = -ang_inc
        else:
            raise ValueError(f"not a rotation direction: {direction!r}")
        self.angle = ang_mod(self.angle + delta)
        self.rot_ang = delta
        return delta

    def move_forward(self, world: "WorldGrid") -> bool:
        """Step one heading vector ahead unless the target is a barrier or off the grid.

        Returns True if the agent moved.
        """
        self.rot_ang = 0
        nf, ni = next_vec_point(self.pos_f, heading_vector(self.angle))
        if not world.in_bounds(ni) or world.blocks(ni):
            return False
        self.pos_f = nf
        self.pos_i = ni
        return True
