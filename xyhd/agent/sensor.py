"""Proximal sensor: what lies one step away in each egocentric direction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .kinematics import AgentPose, heading_vector, next_vec_point

if TYPE_CHECKING:
    from ..world.grid import WorldGrid

FRONT, RIGHT_SIDE, LEFT_SIDE, BACK = range(4)
PROX_DIRS = ["front", "right", "left", "back"]

# Angle offsets relative to heading; left is the positive rotation.
PROX_ANGLES = [0, -90, 90, 180]


@dataclass(frozen=True)
class ProximalSample:
    """Material and grid point one step away in one egocentric direction."""
    direction: str
    mat: int
    pos: tuple


def scan_prox(world: "WorldGrid", pose: AgentPose) -> list[ProximalSample]:
    """Scan the proximal space around the agent: front, right, left, back."""
    samples = []
    for name, off in zip(PROX_DIRS, PROX_ANGLES):
        _, gp = next_vec_point(pose.pos_f, heading_vector(pose.angle + off))
        samples.append(ProximalSample(name, world.get(gp), gp))
    return samples
