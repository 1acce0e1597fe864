"""Decode-accuracy statistics for position and head-direction read-outs.

A trainer decodes a network's position / orientation layers with the same
PopCodec the environment renders with, then scores the decoded values
against the true pose here.
"""

import math


def position_decode_error(decoded, pos_i: tuple, world_size: tuple) -> tuple[float, bool]:
    """Euclidean grid error of a decoded normalized position, and exact match.

    The decoded point is scaled back by (size - 2), the inverse of the
    position rendering, and rounded onto the grid.
    """
    dx = math.floor(float(decoded[0]) * (world_size[0] - 2) + 0.5)
    dy = math.floor(float(decoded[1]) * (world_size[1] - 2) + 0.5)
    err = math.hypot(pos_i[0] - dx, pos_i[1] - dy)
    return err, (dx, dy) == (pos_i[0], pos_i[1])


def orientation_decode_correct(decoded: float, angle: int, ang_inc: int) -> bool:
    """True if the decoded ring value lies within half an increment of angle."""
    dec_ang = math.floor(decoded * 360 + 0.5) % 360
    diff = abs(dec_ang - angle % 360)
    diff = min(diff, 360 - diff)
    return diff < ang_inc / 2
