# tests/test_popcode.py
# Default Gaussian population codec: shapes, peaks and decode fidelity.

import numpy as np
import pytest

from xyhd.config import XYHDConfig
from xyhd.render.popcode import GaussianPopCodec, OneDCode, PopCodec, RingCode, TwoDCode


@pytest.fixture
def codec():
    return GaussianPopCodec.from_config(XYHDConfig())


def ring_dist(a, b):
    d = abs(a - b) % 1.0
    return min(d, 1.0 - d)


def test_default_codec_satisfies_protocol(codec):
    assert isinstance(codec, PopCodec)


def test_from_config_ranges(codec):
    assert (codec.pop.min, codec.pop.max, codec.pop.sigma) == (-0.2, 1.2, 0.1)
    assert (codec.ring.min, codec.ring.max, codec.ring.sigma) == (0.0, 1.0, 0.1)
    assert codec.pos.min == pytest.approx(1 / 3)
    assert codec.pos.max == 1.0


def test_ring_peak_on_matching_unit(codec):
    vec = codec.encode_ring(0.25, 16)
    assert vec.shape == (16,)
    assert vec.dtype == np.float32
    assert int(np.argmax(vec)) == 4
    assert vec[4] == pytest.approx(1.0)


@pytest.mark.parametrize("value", [0.0, 0.25, 0.5, 0.75, 0.3, 0.97])
def test_ring_decode_recovers_value(codec, value):
    dec = codec.decode_ring(codec.encode_ring(value, 16))
    assert 0.0 <= dec < 1.0
    assert ring_dist(dec, value) < 0.02


def test_ring_wraps_around(codec):
    vec = codec.encode_ring(0.0, 16)
    assert vec[1] == pytest.approx(vec[15])


def test_ring_decode_of_silence_is_min():
    assert RingCode().decode(np.zeros(8)) == 0.0


def test_one_d_decode_midrange(codec):
    vec = codec.encode_1d(0.5, 12)
    assert vec.shape == (12,)
    assert codec.decode_1d(vec) == pytest.approx(0.5, abs=0.02)


def test_one_d_clips_out_of_range():
    code = OneDCode(min=0.0, max=1.0, sigma=0.2)
    assert np.allclose(code.encode(5.0, 10), code.encode(1.0, 10))


def test_two_d_shape_and_decode(codec):
    grid = codec.encode_2d((2 / 3, 2 / 3), (16, 16))
    assert grid.shape == (16, 16)
    dec = codec.decode_2d(grid)
    assert dec == pytest.approx([2 / 3, 2 / 3], abs=0.02)


def test_two_d_axes_are_x_then_y():
    code = TwoDCode(min=0.0, max=1.0, sigma=0.1)
    grid = code.encode((1.0, 0.0), (5, 8))
    y, x = np.unravel_index(np.argmax(grid), grid.shape)
    assert (x, y) == (7, 0)
