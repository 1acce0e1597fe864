# tests/test_world_grid.py
# WorldGrid cell access, barrier semantics and map editing.

import numpy as np
import pytest

from xyhd.world.grid import WorldGrid


def test_gen_world_wall_ring_and_clear_center(world):
    cells = world.cells
    assert cells.shape == (5, 5)
    assert (cells[0, :] == 1).all() and (cells[-1, :] == 1).all()
    assert (cells[:, 0] == 1).all() and (cells[:, -1] == 1).all()
    assert (cells[1:-1, 1:-1] == 0).all()
    assert world.get(world.center) == 0


def test_get_set_use_xy_order():
    w = WorldGrid((4, 3), ["Empty", "Wall"])
    w.set((3, 1), 1)
    assert w.get((3, 1)) == 1
    assert w.cells[1, 3] == 1
    assert w.cells.shape == (3, 4)


def test_out_of_bounds_reads_as_barrier_and_rejects_writes(world):
    assert world.get((-1, 2)) == world.barrier_idx
    assert world.get((5, 2)) == world.barrier_idx
    assert world.blocks((2, 7))
    with pytest.raises(IndexError):
        world.set((5, 5), 1)


def test_set_rejects_unknown_material(world):
    with pytest.raises(ValueError):
        world.set((1, 1), 9)


def test_barrier_range():
    w = WorldGrid((5, 5), ["Empty", "Wall", "Rock", "Food"], barrier_idx=2)
    assert not w.is_barrier(0)
    assert w.is_barrier(1)
    assert w.is_barrier(2)
    assert not w.is_barrier(3)


def test_line_diagonal_and_straight():
    w = WorldGrid((7, 7), ["Empty", "Wall"])
    w.line((0, 0), (3, 3), 1)
    assert [tuple(p) for p in np.argwhere(w.cells == 1)] == [(0, 0), (1, 1), (2, 2), (3, 3)]

    w.clear()
    w.line((1, 5), (5, 5), 1)
    assert (w.cells[5, 1:6] == 1).all()
    assert w.cells.sum() == 5

    w.clear()
    w.line((2, 6), (2, 0), 1)
    assert (w.cells[:, 2] == 1).all()


def test_rect_outline_only():
    w = WorldGrid((6, 6), ["Empty", "Wall"])
    w.rect((1, 1), (4, 4), 1)
    assert w.cells[1, 1:5].all() and w.cells[4, 1:5].all()
    assert w.cells[1:5, 1].all() and w.cells[1:5, 4].all()
    assert (w.cells[2:4, 2:4] == 0).all()


def test_scatter_places_exact_count_on_background(world):
    world.scatter(4, 1, np.random.RandomState(0))
    # 16 ring cells + 4 scattered
    assert int((world.cells == 1).sum()) == 20


def test_scatter_refuses_more_than_free(world):
    with pytest.raises(ValueError):
        world.scatter(10, 1, np.random.RandomState(0))


def test_gen_world_prefers_wall_material():
    w = WorldGrid((5, 5), ["Empty", "Wall", "Rock"], barrier_idx=2)
    w.gen_world()
    assert w.get((0, 0)) == 1
    w.gen_world("Rock")
    assert w.get((0, 0)) == 2


def test_gen_world_falls_back_to_barrier_material():
    w = WorldGrid((5, 5), ["Empty", "Rock", "Stone"], barrier_idx=2)
    w.gen_world()
    assert w.get((0, 0)) == 2
    assert w.get(w.center) == 0
