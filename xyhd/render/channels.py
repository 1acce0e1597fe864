"""Named, double-buffered sensor channels and the renderer that fills them.

Rendering writes only the `next` buffers. The environment swaps them into
`cur` once per step, so everything an external reader sees during a tick
comes from the same moment.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .popcode import PopCodec


class Channel(Enum):
    PROX_SOMA = "ProxSoma"
    ANGLE = "Angle"
    VESTIBULAR = "Vestibular"
    POSITION = "Position"
    ACTION = "Action"

    @classmethod
    def lookup(cls, name) -> "Channel | None":
        if isinstance(name, cls):
            return name
        for ch in cls:
            if ch.value == name:
                return ch
        return None


@dataclass
class ChannelBuffer:
    """Current and next tensors for one channel."""
    name: str
    shape: tuple
    cur: np.ndarray = field(init=False)
    next: np.ndarray = field(init=False)

    def __post_init__(self):
        self.cur = np.zeros(self.shape, dtype=np.float32)
        self.next = np.zeros(self.shape, dtype=np.float32)

    def swap(self):
        self.cur[...] = self.next


class SensorFrame:
    """The fixed set of channels, keyed by Channel."""

    def __init__(self, shapes: dict):
        self.buffers = {ch: ChannelBuffer(ch.value, tuple(shapes[ch])) for ch in Channel}

    def __getitem__(self, ch: Channel) -> ChannelBuffer:
        return self.buffers[ch]

    def swap(self):
        for buf in self.buffers.values():
            buf.swap()

    def state(self, name) -> np.ndarray | None:
        """Current tensor for a channel name, or None if there is no such channel."""
        ch = Channel.lookup(name)
        if ch is None:
            return None
        return self.buffers[ch].cur

    def specs(self) -> list[dict]:
        return [{"name": b.name, "shape": b.shape} for b in self.buffers.values()]

    def reset(self):
        for buf in self.buffers.values():
            buf.cur[...] = 0
            buf.next[...] = 0


class SensorRenderer:
    """Renders the agent's state into the `next` buffers of a SensorFrame."""

    def __init__(self, frame: SensorFrame, codec: PopCodec, world_size: tuple,
                 ang_inc: int, pats: dict):
        self.frame = frame
        self.codec = codec
        self.world_size = world_size
        self.ang_inc = ang_inc
        self.pats = pats   # name -> pattern, shared with the environment

    def render_prox_soma(self, prox):
        ps = self.frame[Channel.PROX_SOMA].next
        ps[...] = 0
        for i, sample in enumerate(prox):
            if sample.mat != 0:
                ps[0, i, 0, 0] = 1   # on
            else:
                ps[0, i, 1, 0] = 1   # off

    def render_angle(self, angle: int):
        buf = self.frame[Channel.ANGLE]
        av = angle / 360.0
        buf.next[...] = self.codec.encode_ring(av, buf.shape[-1]).reshape(buf.shape)

    def render_vestibular(self, rot_ang: int):
        buf = self.frame[Channel.VESTIBULAR]
        nv = 0.5 * (-rot_ang / self.ang_inc) + 0.5
        buf.next[...] = self.codec.encode_1d(nv, buf.shape[-1]).reshape(buf.shape)

    def render_position(self, pos_f):
        buf = self.frame[Channel.POSITION]
        pv = (pos_f[0] / (self.world_size[0] - 2), pos_f[1] / (self.world_size[1] - 2))
        buf.next[...] = self.codec.encode_2d(pv, buf.shape)

    def render_action(self, act: str | None):
        buf = self.frame[Channel.ACTION]
        pat = self.pats.get(act) if act is not None else None
        if pat is not None:
            buf.next[...] = pat

    def render(self, pose, prox, act: str | None):
        self.render_prox_soma(prox)
        self.render_angle(pose.angle)
        self.render_vestibular(pose.rot_ang)
        self.render_position(pose.pos_f)
        self.render_action(act)
