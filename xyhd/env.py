"""XYHDEnv: flat grid world with XY position and head direction.

One instance owns everything that changes during a simulation: the world
grid, the agent pose, the proximal scan, the double-buffered sensor frame
and the episode counters. An external trainer drives it once per tick:

    act = env.act_gen()        # or the trainer's own choice
    env.action(act)            # move / turn, rescan, render next state
    env.step()                 # swap buffers, advance counters
    epc, _, chg = env.counter("Epoch")
    x = env.state("Position")

Not safe for concurrent use; one caller owns the instance.
"""

import logging

import numpy as np

from .agent.action_policy import HeuristicPolicy
from .agent.actions import Action, ActionRegistry
from .agent.kinematics import FORWARD, LEFT, RIGHT, AgentPose
from .agent.sensor import scan_prox
from .config import XYHDConfig
from .counters import EpisodeCounters, TimeScale
from .persistence import (
    default_patterns, load_patterns, load_world, save_patterns, save_world,
)
from .render.channels import Channel, SensorFrame, SensorRenderer
from .render.popcode import GaussianPopCodec, PopCodec
from .world.grid import WorldGrid

logger = logging.getLogger("xyhd.env")

BUILTIN_ACTIONS = {
    LEFT: "Rotate one increment to the left",
    RIGHT: "Rotate one increment to the right",
    FORWARD: "Step one cell along the heading unless blocked",
}


class XYHDEnv:
    """
    Grid-world navigation environment.

    - World grid of materials with barrier collision
    - Continuous pose rounded onto the grid, heading in fixed increments
    - Proximal scan of the four egocentric neighbours
    - Reflexive heuristic policy for generating actions
    - Named sensor channels rendered through a swappable PopCodec
    - Run > Epoch > Trial > Tick > Event > Scene > Episode counters
    """

    def __init__(self, cfg: XYHDConfig | None = None, codec: PopCodec | None = None,
                 rng: np.random.RandomState | None = None,
                 name: str = "Demo",
                 desc: str = "Example world with xy coordinate system and head direction"):
        self.cfg = cfg or XYHDConfig()
        self.name = name
        self.desc = desc
        self.validate()
        cfg = self.cfg

        self.rng = rng if rng is not None else np.random.RandomState(cfg.SEED)
        self.ang_inc = cfg.ANG_INC

        # World
        self.world = WorldGrid(cfg.WORLD_SIZE, cfg.MATS, cfg.BARRIER_IDX)
        self.world.gen_world()

        # Actions
        self.actions = ActionRegistry()
        handlers = {LEFT: self._rot_left, RIGHT: self._rot_right, FORWARD: self._forward}
        for a in cfg.ACTS:
            self.actions.register(Action(a, BUILTIN_ACTIONS[a], fn=handlers[a]))
        self.policy = HeuristicPolicy(self.rng, cfg.BARRIER_IDX, trace=cfg.TRACE_ACT_GEN)

        # Patterns for mats and acts (replace via open_pats)
        self.pat_shape = (cfg.PAT_SIZE[1], cfg.PAT_SIZE[0])
        self.pats = default_patterns(list(cfg.MATS) + list(cfg.ACTS), self.pat_shape,
                                     self.rng, cfg.PAT_PCT_ON)

        # Sensor channels
        self.codec = codec if codec is not None else GaussianPopCodec.from_config(cfg)
        self.frame = SensorFrame({
            Channel.PROX_SOMA: (1, 4, 2, 1),
            Channel.ANGLE: (1, cfg.RING_SIZE),
            Channel.VESTIBULAR: (1, cfg.POP_SIZE),
            Channel.POSITION: (cfg.POS_SIZE[1], cfg.POS_SIZE[0]),
            Channel.ACTION: self.pat_shape,
        })
        self.renderer = SensorRenderer(self.frame, self.codec, self.world.size,
                                       cfg.ANG_INC, self.pats)

        self.counters = EpisodeCounters(trial_max=cfg.TRIAL_MAX, epoch_max=cfg.EPOCH_MAX,
                                        run_max=cfg.RUN_MAX)

        # Current state
        self.pose = AgentPose()
        self.prox = []
        self.act: str | None = None
        self.cells_visited: set[tuple] = set()
        self.bumps = 0

        self.init(0)

    # ------------------------------------------------------------------ #
    #  Setup                                                               #
    # ------------------------------------------------------------------ #
    def validate(self):
        """Check the configuration; raises ValueError on the first problem."""
        cfg = self.cfg
        if min(cfg.WORLD_SIZE) < 3:
            raise ValueError(f"{self.name}: world size {cfg.WORLD_SIZE} too small, need >= 3")
        if cfg.ANG_INC <= 0 or 360 % cfg.ANG_INC != 0:
            raise ValueError(f"{self.name}: ANG_INC {cfg.ANG_INC} must divide 360")
        if not 1 <= cfg.BARRIER_IDX < len(cfg.MATS):
            raise ValueError(f"{self.name}: BARRIER_IDX {cfg.BARRIER_IDX} out of range")
        for a in (LEFT, RIGHT, FORWARD):
            if a not in cfg.ACTS:
                raise ValueError(f"{self.name}: missing required action {a}")
        for a in cfg.ACTS:
            if a not in BUILTIN_ACTIONS:
                raise ValueError(f"{self.name}: no built-in action {a}, register it instead")
        if min(cfg.PAT_SIZE) <= 0 or min(cfg.POS_SIZE) <= 0:
            raise ValueError(f"{self.name}: pattern sizes must be positive")
        if cfg.RING_SIZE <= 0 or cfg.POP_SIZE <= 1:
            raise ValueError(f"{self.name}: RING_SIZE / POP_SIZE too small")

    def init(self, run: int = 0):
        """Restart: counters, agent in the middle facing angle 0."""
        self.counters.init(run)
        self.pose = AgentPose.at(self.world.center, 0)
        self.act = None
        self.cells_visited = {self.pose.pos_i}
        self.bumps = 0
        self.prox = scan_prox(self.world, self.pose)
        self.frame.reset()
        self.renderer.render(self.pose, self.prox, self.act)
        self.frame.swap()

    def register_action(self, action: Action, pattern: np.ndarray | None = None):
        """Extend the action vocabulary; pattern feeds the Action channel."""
        if pattern is not None:
            pattern = np.asarray(pattern, dtype=np.float32)
            if pattern.shape != self.pat_shape:
                raise ValueError(f"pattern for {action.name!r} has shape {pattern.shape}, "
                                 f"expected {self.pat_shape}")
        self.actions.register(action)
        if pattern is not None:
            self.pats[action.name] = pattern

    # ------------------------------------------------------------------ #
    #  Runtime API                                                         #
    # ------------------------------------------------------------------ #
    def state(self, element) -> np.ndarray | None:
        return self.frame.state(element)

    def states(self) -> list[dict]:
        return self.frame.specs()

    def step(self) -> bool:
        """Swap the rendered next state into view and advance counters."""
        self.frame.swap()
        if self.counters.step():
            logger.debug(f"epoch -> {self.counters[TimeScale.EPOCH].cur}")
        return True

    def action(self, action: str, param=None):
        """Apply a named action, rescan and render the next state."""
        if action not in self.actions:
            logger.warning(f"Action not recognized: {action}")
            return
        self.act = action
        self.actions.invoke(action)
        self.prox = scan_prox(self.world, self.pose)
        self.renderer.render(self.pose, self.prox, self.act)

    def act_gen(self) -> str:
        """Heuristic action for the current situation."""
        return self.policy.choose(self.prox, self.act)

    def tick(self) -> str:
        """One full tick driven by the built-in policy. Returns the action."""
        act = self.act_gen()
        self.action(act)
        self.step()
        return act

    def counter(self, scale) -> tuple[int, int, bool]:
        try:
            return self.counters.query(scale)
        except KeyError:
            return -1, -1, False

    def counter_scales(self) -> list[TimeScale]:
        return self.counters.scales()

    # ------------------------------------------------------------------ #
    #  Action handlers                                                     #
    # ------------------------------------------------------------------ #
    def _rot_left(self):
        self.pose.rotate(LEFT, self.ang_inc)

    def _rot_right(self):
        self.pose.rotate(RIGHT, self.ang_inc)

    def _forward(self):
        if self.pose.move_forward(self.world):
            self.cells_visited.add(self.pose.pos_i)
        else:
            self.bumps += 1

    # ------------------------------------------------------------------ #
    #  Pose accessors                                                      #
    # ------------------------------------------------------------------ #
    @property
    def pos_f(self) -> np.ndarray:
        return self.pose.pos_f

    @property
    def pos_i(self) -> tuple:
        return self.pose.pos_i

    @property
    def angle(self) -> int:
        return self.pose.angle

    @property
    def rot_ang(self) -> int:
        return self.pose.rot_ang

    # ------------------------------------------------------------------ #
    #  I/O                                                                 #
    # ------------------------------------------------------------------ #
    def open_world(self, filepath) -> int:
        unknown = load_world(self.world, filepath)
        self.prox = scan_prox(self.world, self.pose)
        self.renderer.render(self.pose, self.prox, self.act)
        logger.info(f"world loaded from {filepath} ({unknown} unknown cells)")
        return unknown

    def save_world(self, filepath):
        save_world(self.world, filepath)
        logger.info(f"world saved to {filepath}")

    def open_pats(self, filepath):
        load_patterns(self.pats, filepath, self.pat_shape,
                      names=list(self.world.mats) + self.actions.names())
        logger.info(f"patterns loaded from {filepath}")

    def save_pats(self, filepath):
        save_patterns(self.pats, filepath)
        logger.info(f"patterns saved to {filepath}")

    # ------------------------------------------------------------------ #
    #  Reporting                                                           #
    # ------------------------------------------------------------------ #
    def get_state(self) -> dict:
        """Snapshot for logging / metrics."""
        return {
            "run": self.counters[TimeScale.RUN].cur,
            "epoch": self.counters[TimeScale.EPOCH].cur,
            "trial": self.counters[TimeScale.TRIAL].cur,
            "tick": self.counters[TimeScale.TICK].cur,
            "pos": list(self.pose.pos_i),
            "angle": self.pose.angle,
            "rot_ang": self.pose.rot_ang,
            "action": self.act or "",
            "prox": [s.mat for s in self.prox],
            "cells_visited": len(self.cells_visited),
            "bumps": self.bumps,
            "counters": self.counters.to_dict(),
        }

    def __str__(self) -> str:
        evt = self.counters[TimeScale.EVENT].cur
        x, y = self.pose.pos_i
        return f"Evt_{evt}_Pos_{x}_{y}_Ang_{self.pose.angle}_Act_{self.act}"
