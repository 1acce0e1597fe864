# tests/test_counters.py
# Counter increment / wrap semantics and the per-tick stepping order.

import pytest

from xyhd.counters import Ctr, EpisodeCounters, TimeScale


def test_ctr_incr_wraps_at_max():
    c = Ctr(TimeScale.TRIAL, max=3)
    c.init()
    assert c.incr() is False and c.cur == 1
    assert c.incr() is False and c.cur == 2
    assert c.incr() is True and c.cur == 0
    assert c.prv == 2


def test_ctr_without_max_never_wraps():
    c = Ctr(TimeScale.TICK)
    c.init()
    for _ in range(1000):
        assert c.incr() is False
    assert c.cur == 1000


def test_ctr_query_changed():
    c = Ctr(TimeScale.EPOCH)
    c.init()
    assert c.query() == (0, -1, True)
    c.same()
    assert c.query() == (0, 0, False)
    c.incr()
    assert c.query() == (1, 0, True)


def test_ctr_set():
    c = Ctr(TimeScale.SCENE)
    c.init()
    assert c.set(0) is False
    assert c.set(4) is True
    assert c.query() == (4, 0, True)


def test_time_scale_parse():
    assert TimeScale.parse("epoch") is TimeScale.EPOCH
    assert TimeScale.parse("Episode") is TimeScale.EPISODE
    assert TimeScale.parse(TimeScale.RUN) is TimeScale.RUN
    with pytest.raises(KeyError):
        TimeScale.parse("Century")


def test_init_sets_run_and_first_tick():
    ec = EpisodeCounters(trial_max=5)
    ec.init(run=3)
    assert ec[TimeScale.RUN].cur == 3
    assert ec["Trial"].cur == 0
    assert ec["Tick"].cur == -1
    ec.step()
    assert ec["Tick"].cur == 0
    assert ec["Event"].cur == 0


def test_epoch_advances_once_per_trial_max_steps():
    n = 5
    ec = EpisodeCounters(trial_max=n)
    ec.init()
    for i in range(n - 1):
        assert ec.step() is False
        assert ec.query("Epoch") == (0, 0, False)
    assert ec.step() is True
    assert ec.query("Epoch") == (1, 0, True)
    assert ec["Trial"].cur == 0
    # next step: epoch snapshot makes it unchanged again
    ec.step()
    assert ec.query("Epoch") == (1, 1, False)


def test_scene_and_episode_are_left_to_the_caller():
    ec = EpisodeCounters(trial_max=2)
    ec.init()
    for _ in range(6):
        ec.step()
    assert ec["Scene"].cur == 0
    assert ec["Episode"].cur == 0
    ec["Scene"].incr()
    assert ec.query("Scene") == (1, 0, True)


def test_scales_outermost_first():
    assert EpisodeCounters().scales() == [
        TimeScale.RUN, TimeScale.EPOCH, TimeScale.TRIAL, TimeScale.TICK,
        TimeScale.EVENT, TimeScale.SCENE, TimeScale.EPISODE,
    ]
