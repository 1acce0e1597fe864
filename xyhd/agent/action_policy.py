"""Reactive heuristic action policy, the agent's built-in instincts.

Looks only at the proximal scan and the previous action:
  at a wall  -> turn, keeping the previous turn direction if there was one
  in the open -> mostly go forward, sometimes turn away from a side wall

The thresholds below were tuned by hand and are kept as-is.
"""

import logging

import numpy as np

from .kinematics import FORWARD, LEFT, RIGHT
from .sensor import FRONT, LEFT_SIDE, RIGHT_SIDE, ProximalSample

logger = logging.getLogger("xyhd.policy")

ACTIONS = [LEFT, RIGHT, FORWARD]
TURNS = (LEFT, RIGHT)

TURN_AWAY_P = 0.15     # u < this: turn away from a blocked side
TURN_TOWARD_P = 0.30   # u < this: turn the other way
RIGHT_COIN_P = 0.5     # coin flip for which way to turn at a wall


class HeuristicPolicy:
    """Stateless reflex controller over Left / Right / Forward.

    All randomness comes from the injected RandomState, so a fixed seed
    reproduces the same action sequence.
    """

    def __init__(self, rng: np.random.RandomState, barrier_idx: int = 1,
                 trace: bool = False):
        self.rng = rng
        self.barrier_idx = barrier_idx
        self.trace = trace

    def _blocked(self, sample: ProximalSample) -> bool:
        return 0 < sample.mat <= self.barrier_idx

    def _trace(self, desc: str, act: str):
        if self.trace:
            logger.debug(f"{desc}: act: {act}")

    def choose(self, prox: list[ProximalSample], last_action: str | None = None) -> str:
        """Pick the next action from the proximal scan and the last action."""
        front = self._blocked(prox[FRONT])
        right = self._blocked(prox[RIGHT_SIDE])
        left = self._blocked(prox[LEFT_SIDE])

        if front:
            if not right and not left:
                if last_action in TURNS:
                    act = last_action
                    self._trace("at wall, keep turning", act)
                else:
                    act = RIGHT if self.rng.random_sample() < RIGHT_COIN_P else LEFT
                    self._trace(f"at wall, rlp: {RIGHT_COIN_P:.3g}, turn", act)
            elif right and not left:
                act = LEFT
                self._trace("at wall, right blocked", act)
            else:
                # left blocked, or boxed in on both sides
                act = RIGHT
                self._trace("at wall, left blocked", act)
            return act

        # random explore -- nothing obvious
        u = self.rng.random_sample()
        if u < TURN_AWAY_P:
            act = RIGHT if left else LEFT
            self._trace("turn", act)
        elif u < TURN_TOWARD_P:
            act = LEFT if right else RIGHT
            self._trace("turn", act)
        else:
            act = FORWARD
            self._trace("go", act)
        return act
