"""Episode counters: nested time scales with wrap-and-carry semantics.

Outermost to innermost: Run > Epoch > Trial > Tick > Event > Scene > Episode.
A counter that wraps at its max only reports it; the caller carries into
the next-outer scale.
"""

from dataclasses import dataclass
from enum import Enum


class TimeScale(Enum):
    RUN = "Run"
    EPOCH = "Epoch"
    TRIAL = "Trial"
    TICK = "Tick"
    EVENT = "Event"
    SCENE = "Scene"
    EPISODE = "Episode"

    @classmethod
    def parse(cls, scale) -> "TimeScale":
        """Accept a TimeScale or its name, case-insensitive."""
        if isinstance(scale, cls):
            return scale
        key = str(scale).strip().lower()
        for ts in cls:
            if ts.value.lower() == key:
                return ts
        raise KeyError(f"unknown time scale: {scale!r}")


@dataclass
class Ctr:
    """One counter: current, previous, and optional max (0 = no max)."""
    scale: TimeScale
    cur: int = 0
    prv: int = -1
    max: int = 0

    def init(self):
        self.prv = -1
        self.cur = 0

    def same(self):
        """Mark the counter unchanged for this step."""
        self.prv = self.cur

    def incr(self) -> bool:
        """Increment; returns True if it hit max and wrapped to 0."""
        self.prv = self.cur
        self.cur += 1
        if self.max > 0 and self.cur >= self.max:
            self.cur = 0
            return True
        return False

    def set(self, cur: int) -> bool:
        """Set cur directly; returns True if that is a change."""
        if self.cur == cur:
            return False
        self.prv = self.cur
        self.cur = cur
        return True

    @property
    def changed(self) -> bool:
        return self.cur != self.prv

    def query(self) -> tuple[int, int, bool]:
        return self.cur, self.prv, self.changed


class EpisodeCounters:
    """One Ctr per TimeScale, owned by the environment."""

    def __init__(self, trial_max: int = 0, epoch_max: int = 0, run_max: int = 0):
        self.ctrs = {ts: Ctr(ts) for ts in TimeScale}
        self.ctrs[TimeScale.TRIAL].max = trial_max
        self.ctrs[TimeScale.EPOCH].max = epoch_max
        self.ctrs[TimeScale.RUN].max = run_max

    def get(self, scale) -> Ctr:
        return self.ctrs[TimeScale.parse(scale)]

    def __getitem__(self, scale) -> Ctr:
        return self.get(scale)

    def init(self, run: int = 0):
        for ctr in self.ctrs.values():
            ctr.init()
        self.ctrs[TimeScale.RUN].cur = run
        # first step() reports tick 0
        self.ctrs[TimeScale.TICK].cur = -1
        self.ctrs[TimeScale.EVENT].cur = -1

    def step(self) -> bool:
        """Advance one tick. Returns True when the epoch advanced."""
        self.ctrs[TimeScale.EPOCH].same()
        self.ctrs[TimeScale.TICK].incr()
        self.ctrs[TimeScale.EVENT].incr()
        if self.ctrs[TimeScale.TRIAL].incr():
            self.ctrs[TimeScale.EPOCH].incr()
            return True
        return False

    def query(self, scale) -> tuple[int, int, bool]:
        return self.get(scale).query()

    def scales(self) -> list[TimeScale]:
        return list(self.ctrs)

    def to_dict(self) -> dict:
        return {ts.value: {"cur": c.cur, "prv": c.prv, "max": c.max}
                for ts, c in self.ctrs.items()}
