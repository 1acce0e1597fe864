"""WorldGrid: the flat 2D world, one material index per cell."""

import logging

import numpy as np

from ..agent.kinematics import next_vec_point, norm_vec_line

logger = logging.getLogger("xyhd.world")


class WorldGrid:
    """
    A 2D grid of material indices, stored as an int array indexed [y, x].

    Points are (x, y) tuples. Material 0 is background; materials with index
    in (0, barrier_idx] cannot be walked into. Anything outside the grid reads
    as the barrier material, so the world edge always blocks.
    """

    def __init__(self, size: tuple = (5, 5), mats: list[str] | None = None,
                 barrier_idx: int = 1):
        self.size = (int(size[0]), int(size[1]))
        self.mats = list(mats) if mats is not None else ["Empty", "Wall"]
        self.mat_map = {m: i for i, m in enumerate(self.mats)}
        self.barrier_idx = barrier_idx
        self.cells = np.zeros((self.size[1], self.size[0]), dtype=int)

    # ------------------------------------------------------------------ #
    #  Cell access                                                         #
    # ------------------------------------------------------------------ #
    def in_bounds(self, p: tuple) -> bool:
        return 0 <= p[0] < self.size[0] and 0 <= p[1] < self.size[1]

    def get(self, p: tuple) -> int:
        """Material at point p; out-of-bounds points read as the barrier."""
        if not self.in_bounds(p):
            return self.barrier_idx
        return int(self.cells[p[1], p[0]])

    def set(self, p: tuple, mat: int):
        if not self.in_bounds(p):
            raise IndexError(f"point {p} outside world of size {self.size}")
        if not 0 <= mat < len(self.mats):
            raise ValueError(f"unknown material index {mat}")
        self.cells[p[1], p[0]] = mat

    def mat_index(self, name: str) -> int:
        return self.mat_map[name]

    def mat_name(self, mat: int) -> str:
        return self.mats[mat]

    def is_barrier(self, mat: int) -> bool:
        return 0 < mat <= self.barrier_idx

    def blocks(self, p: tuple) -> bool:
        return self.is_barrier(self.get(p))

    def clear(self):
        self.cells[:] = 0

    @property
    def center(self) -> tuple:
        return self.size[0] // 2, self.size[1] // 2

    # ------------------------------------------------------------------ #
    #  Map editing                                                         #
    # ------------------------------------------------------------------ #
    def line_horiz(self, st: tuple, ed: tuple, mat: int):
        for x in range(min(st[0], ed[0]), max(st[0], ed[0]) + 1):
            self.set((x, st[1]), mat)

    def line_vert(self, st: tuple, ed: tuple, mat: int):
        for y in range(min(st[1], ed[1]), max(st[1], ed[1]) + 1):
            self.set((st[0], y), mat)

    def line(self, st: tuple, ed: tuple, mat: int):
        """Draw a line of mat from st to ed, in any direction."""
        dx, dy = ed[0] - st[0], ed[1] - st[1]
        if dx == 0:
            self.line_vert(st, ed, mat)
            return
        if dy == 0:
            self.line_horiz(st, ed, mat)
            return
        dst = float(np.hypot(dx, dy))
        v = norm_vec_line(np.array([dx, dy], dtype=float))
        op = np.array(st, dtype=float)
        cp = op
        self.set(st, mat)
        while True:
            cp, gp = next_vec_point(cp, v)
            self.set(gp, mat)
            if np.linalg.norm(cp - op) >= dst - 1e-6:
                break

    def rect(self, st: tuple, ed: tuple, mat: int):
        """Draw the outline of the rectangle spanned by st and ed."""
        self.line_horiz(st, (ed[0], st[1]), mat)
        self.line_horiz((st[0], ed[1]), ed, mat)
        self.line_vert(st, (st[0], ed[1]), mat)
        self.line_vert((ed[0], st[1]), ed, mat)

    def scatter(self, n: int, mat: int, rng: np.random.RandomState):
        """Place n cells of mat at random background locations."""
        free = int((self.cells == 0).sum())
        if n > free:
            raise ValueError(f"cannot place {n} cells, only {free} free")
        cnt = 0
        while cnt < n:
            p = (rng.randint(self.size[0]), rng.randint(self.size[1]))
            if self.get(p) == 0:
                self.set(p, mat)
                cnt += 1

    def gen_world(self, wall: str | None = None):
        """Default world: a wall around the entire edge, center left clear.

        The wall defaults to "Wall" when that material exists, otherwise
        to the barrier material.
        """
        if wall is None:
            wall = "Wall" if "Wall" in self.mat_map else self.mats[self.barrier_idx]
        wmat = self.mat_index(wall)
        self.clear()
        self.rect((0, 0), (self.size[0] - 1, self.size[1] - 1), wmat)
        self.set(self.center, 0)
        logger.debug(f"generated {self.size[0]}x{self.size[1]} walled world")

    def __str__(self) -> str:
        rows = []
        for y in range(self.size[1]):
            rows.append("".join("." if m == 0 else str(m) for m in self.cells[y]))
        return "\n".join(rows)
