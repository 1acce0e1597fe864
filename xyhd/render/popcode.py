"""Population codes for scalar, circular and 2D values.

The environment only normalizes its own state into [0, 1) / [0, 1]^2 and
calls a PopCodec; any object with the same methods can replace the default
Gaussian bump codec below (decode-accuracy statistics depend on its
round-trip fidelity, so swapping it changes what they measure).

Each unit i has a preferred value trg_i spread evenly over [min, max] and
fires exp(-((trg_i - value) / (sigma * (max - min)))^2). Decoding takes the
activity-weighted mean of preferred values, ignoring units below thr; the
ring code uses a circular mean instead.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class PopCodec(Protocol):
    """Encode / decode contract used by the sensor renderer."""

    def encode_ring(self, value: float, n: int) -> np.ndarray:
        ...

    def decode_ring(self, vec: np.ndarray) -> float:
        ...

    def encode_1d(self, value: float, n: int) -> np.ndarray:
        ...

    def decode_1d(self, vec: np.ndarray) -> float:
        ...

    def encode_2d(self, point, shape: tuple) -> np.ndarray:
        ...

    def decode_2d(self, grid: np.ndarray) -> np.ndarray:
        ...


@dataclass
class OneDCode:
    min: float = -0.5
    max: float = 1.5
    sigma: float = 0.2
    clip: bool = True
    thr: float = 0.1        # activity below this is ignored when decoding
    min_sum: float = 0.2    # floor on total activity when decoding

    def set_range(self, lo: float, hi: float, sigma: float):
        self.min, self.max, self.sigma = lo, hi, sigma

    def targets(self, n: int) -> np.ndarray:
        return np.linspace(self.min, self.max, n)

    def encode(self, value: float, n: int) -> np.ndarray:
        if self.clip:
            value = float(np.clip(value, self.min, self.max))
        sr = self.sigma * (self.max - self.min)
        dist = (self.targets(n) - value) / sr
        return np.exp(-dist ** 2).astype(np.float32)

    def decode(self, vec: np.ndarray) -> float:
        act = np.asarray(vec, dtype=float).ravel()
        act = np.where(act < self.thr, 0.0, act)
        total = max(act.sum(), self.min_sum)
        return float((self.targets(len(act)) * act).sum() / total)


@dataclass
class RingCode:
    min: float = 0.0
    max: float = 1.0
    sigma: float = 0.2
    thr: float = 0.1

    def set_range(self, lo: float, hi: float, sigma: float):
        self.min, self.max, self.sigma = lo, hi, sigma

    def targets(self, n: int) -> np.ndarray:
        # n units around the circle; max wraps onto min
        return self.min + (self.max - self.min) * np.arange(n) / n

    def encode(self, value: float, n: int) -> np.ndarray:
        rng = self.max - self.min
        d = np.abs(self.targets(n) - value) % rng
        d = np.minimum(d, rng - d)
        return np.exp(-(d / (self.sigma * rng)) ** 2).astype(np.float32)

    def decode(self, vec: np.ndarray) -> float:
        act = np.asarray(vec, dtype=float).ravel()
        act = np.where(act < self.thr, 0.0, act)
        if act.sum() == 0:
            return self.min
        rng = self.max - self.min
        theta = 2 * np.pi * np.arange(len(act)) / len(act)
        ang = np.arctan2((act * np.sin(theta)).sum(), (act * np.cos(theta)).sum())
        val = self.min + rng * (ang % (2 * np.pi)) / (2 * np.pi)
        if val >= self.max:
            val = self.min
        return float(val)


@dataclass
class TwoDCode:
    min: float = -0.5
    max: float = 1.5
    sigma: float = 0.2
    clip: bool = True
    thr: float = 0.1
    min_sum: float = 0.2

    def set_range(self, lo: float, hi: float, sigma: float):
        self.min, self.max, self.sigma = lo, hi, sigma

    def encode(self, point, shape: tuple) -> np.ndarray:
        """Encode (x, y) onto a grid of shape (Y, X)."""
        px, py = float(point[0]), float(point[1])
        if self.clip:
            px = float(np.clip(px, self.min, self.max))
            py = float(np.clip(py, self.min, self.max))
        sr = self.sigma * (self.max - self.min)
        ys = np.linspace(self.min, self.max, shape[0])
        xs = np.linspace(self.min, self.max, shape[1])
        dx = (xs[np.newaxis, :] - px) / sr
        dy = (ys[:, np.newaxis] - py) / sr
        return np.exp(-(dx ** 2 + dy ** 2)).astype(np.float32)

    def decode(self, grid: np.ndarray) -> np.ndarray:
        act = np.asarray(grid, dtype=float)
        act = np.where(act < self.thr, 0.0, act)
        total = max(act.sum(), self.min_sum)
        ys = np.linspace(self.min, self.max, act.shape[0])
        xs = np.linspace(self.min, self.max, act.shape[1])
        x = (act.sum(axis=0) * xs).sum() / total
        y = (act.sum(axis=1) * ys).sum() / total
        return np.array([x, y])


class GaussianPopCodec:
    """Default PopCodec: Gaussian bumps for 1D, ring and 2D values."""

    def __init__(self, pop: OneDCode | None = None, ring: RingCode | None = None,
                 pos: TwoDCode | None = None):
        self.pop = pop or OneDCode()
        self.ring = ring or RingCode()
        self.pos = pos or TwoDCode()

    @classmethod
    def from_config(cls, cfg) -> "GaussianPopCodec":
        codec = cls()
        codec.pop.set_range(cfg.POP_MIN, cfg.POP_MAX, cfg.POP_SIGMA)
        codec.ring.set_range(cfg.RING_MIN, cfg.RING_MAX, cfg.RING_SIGMA)
        codec.pos.set_range(cfg.pos_min, cfg.POS_MAX, cfg.POS_SIGMA)
        return codec

    def encode_ring(self, value: float, n: int) -> np.ndarray:
        return self.ring.encode(value, n)

    def decode_ring(self, vec: np.ndarray) -> float:
        return self.ring.decode(vec)

    def encode_1d(self, value: float, n: int) -> np.ndarray:
        return self.pop.encode(value, n)

    def decode_1d(self, vec: np.ndarray) -> float:
        return self.pop.decode(vec)

    def encode_2d(self, point, shape: tuple) -> np.ndarray:
        return self.pos.encode(point, shape)

    def decode_2d(self, grid: np.ndarray) -> np.ndarray:
        return self.pos.decode(grid)
