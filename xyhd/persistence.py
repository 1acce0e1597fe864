"""Save/load for world maps (TSV) and named pattern tables (JSON)."""

import json
import logging
from pathlib import Path

import numpy as np

from .world.grid import WorldGrid

logger = logging.getLogger("xyhd.persistence")


# ------------------------------------------------------------------ #
#  World maps                                                          #
# ------------------------------------------------------------------ #
def save_world(world: WorldGrid, filepath):
    """Save the world as one tab-delimited line per row of material names.

    Background cells are written as empty fields.
    """
    lines = []
    for y in range(world.size[1]):
        row = []
        for x in range(world.size[0]):
            mat = int(world.cells[y, x])
            row.append("" if mat == 0 else world.mat_name(mat))
        lines.append("\t".join(row))
    Path(filepath).write_text("\n".join(lines) + "\n")


def load_world(world: WorldGrid, filepath) -> int:
    """Load a TSV world map into an existing grid.

    Unknown material names are logged and left as background. Returns the
    number of unknown cells.
    """
    text = Path(filepath).read_text()
    world.clear()
    unknown = 0
    for y, line in enumerate(text.splitlines()[:world.size[1]]):
        for x, name in enumerate(line.split("\t")[:world.size[0]]):
            name = name.strip()
            if not name:
                continue
            mi = world.mat_map.get(name)
            if mi is None:
                logger.warning(f"Mat not found: {name} at ({x}, {y})")
                unknown += 1
            else:
                world.cells[y, x] = mi
    return unknown


# ------------------------------------------------------------------ #
#  Pattern tables                                                      #
# ------------------------------------------------------------------ #
def default_patterns(names: list[str], shape: tuple, rng: np.random.RandomState,
                     pct_on: float = 0.25) -> dict[str, np.ndarray]:
    """Random sparse binary patterns, pct_on of units active, distinct per name."""
    n = int(np.prod(shape))
    n_on = max(1, int(round(n * pct_on)))
    pats = {}
    seen = set()
    for name in names:
        for _ in range(100):
            flat = np.zeros(n, dtype=np.float32)
            flat[rng.permutation(n)[:n_on]] = 1
            key = flat.tobytes()
            if key not in seen:
                break
        seen.add(key)
        pats[name] = flat.reshape(shape)
    return pats


def save_patterns(pats: dict[str, np.ndarray], filepath):
    """Save patterns as {name: {"shape": [...], "values": [...]}}."""
    doc = {
        name: {"shape": list(p.shape), "values": np.asarray(p).ravel().tolist()}
        for name, p in pats.items()
    }
    Path(filepath).write_text(json.dumps(doc, indent=1))


def load_patterns(pats: dict[str, np.ndarray], filepath, shape: tuple,
                  names: list[str] | None = None) -> dict[str, np.ndarray]:
    """Load patterns into pats, checking every entry has the expected shape.

    Names outside `names` (when given) are logged and skipped. A shape
    mismatch raises ValueError and leaves pats untouched.
    """
    data = json.loads(Path(filepath).read_text())
    loaded = {}
    for name, entry in data.items():
        if names is not None and name not in names:
            logger.warning(f"pattern for unknown name skipped: {name}")
            continue
        eshape = tuple(entry["shape"])
        if eshape != tuple(shape):
            raise ValueError(f"pattern {name!r} has shape {eshape}, expected {tuple(shape)}")
        loaded[name] = np.array(entry["values"], dtype=np.float32).reshape(eshape)
    pats.update(loaded)
    return pats
