import numpy as np
import pytest

from stencilbench.convolution import (
    conv2d,
    conv2d_sizes,
    conv3d,
    conv3d_sizes,
    init_conv2d,
    init_conv3d,
)
from stencilbench.util import Dataset


def test_conv2d_sizes_default_is_large():
    assert tuple(conv2d_sizes()) == (4096, 4096)


def test_conv2d_sizes_presets():
    assert tuple(conv2d_sizes("mini")) == (64, 64)
    assert tuple(conv2d_sizes(Dataset.EXTRALARGE)) == (8192, 8192)


def test_conv3d_sizes_presets():
    assert tuple(conv3d_sizes()) == (256, 256, 256)
    assert tuple(conv3d_sizes("STANDARD_DATASET")) == (192, 192, 192)


def test_unknown_dataset_raises():
    with pytest.raises(ValueError):
        conv2d_sizes("huge")
    with pytest.raises(ValueError):
        conv3d_sizes("huge")


def test_init_conv2d_reproducible_and_in_range():
    a = init_conv2d(8, 6, seed=5)
    b = init_conv2d(8, 6, seed=5)
    assert a.shape == (8, 6)
    assert a.dtype == np.float32
    assert np.array_equal(a, b)
    assert a.min() >= 0.0
    assert a.max() < 1.0


def test_init_conv2d_rejects_bad_size():
    with pytest.raises(ValueError):
        init_conv2d(0, 4)


def test_conv2d_delta_response_matches_coefficients():
    a = np.zeros((5, 5), dtype=np.float32)
    a[2, 2] = 1.0
    b = conv2d(a)
    assert b[2, 2] == pytest.approx(0.6)
    assert b[1, 1] == pytest.approx(0.1)
    assert b[3, 3] == pytest.approx(0.2)
    assert b[1, 2] == pytest.approx(0.7)
    assert b[3, 1] == pytest.approx(-0.8)
    assert b[2, 3] == pytest.approx(-0.3)


def test_conv2d_border_is_zero():
    b = conv2d(init_conv2d(7, 9, seed=1))
    assert b.shape == (7, 9)
    assert np.count_nonzero(b[0, :]) == 0
    assert np.count_nonzero(b[-1, :]) == 0
    assert np.count_nonzero(b[:, 0]) == 0
    assert np.count_nonzero(b[:, -1]) == 0
    assert np.count_nonzero(b[1:-1, 1:-1]) > 0


def test_conv2d_constant_input():
    a = np.full((6, 6), 2.0, dtype=np.float32)
    b = conv2d(a)
    assert np.allclose(b[1:-1, 1:-1], 1.0, atol=1e-5)


def test_conv2d_is_linear():
    a = init_conv2d(10, 10, seed=2)
    c = init_conv2d(10, 10, seed=3)
    assert np.allclose(conv2d(a + c), conv2d(a) + conv2d(c), atol=1e-5)


def test_conv2d_rejects_wrong_rank():
    with pytest.raises(ValueError):
        conv2d(np.zeros(5))


def test_init_conv3d_pattern():
    a = init_conv3d(26, 15, 27)
    assert a.shape == (26, 15, 27)
    assert a[0, 0, 0] == 0
    assert np.array_equal(a[12:24], a[0:12])
    assert np.array_equal(a[:, 7:14], a[:, 0:7])
    assert np.array_equal(a[:, :, 13:26], a[:, :, 0:13])


def test_init_conv3d_rejects_bad_size():
    with pytest.raises(ValueError):
        init_conv3d(3, -1, 3)


def test_conv3d_delta_response_depends_on_first_axis():
    a = np.zeros((5, 5, 5), dtype=np.float32)
    a[2, 2, 2] = 1.0
    b = conv3d(a)
    assert b[1, 1, 1] == pytest.approx(5.0)
    assert b[1, 3, 2] == pytest.approx(5.0)
    assert b[2, 2, 2] == pytest.approx(4.0)
    assert b[3, 3, 3] == pytest.approx(2.12345, rel=1e-6)
    assert b[3, 1, 3] == pytest.approx(2.12345, rel=1e-6)


def test_conv3d_border_is_zero():
    b = conv3d(init_conv3d(5, 6, 7))
    assert b.shape == (5, 6, 7)
    assert np.count_nonzero(b[0]) == 0
    assert np.count_nonzero(b[-1]) == 0
    assert np.count_nonzero(b[:, 0]) == 0
    assert np.count_nonzero(b[:, :, -1]) == 0


def test_conv3d_small_input_all_zero():
    b = conv3d(np.ones((2, 5, 5), dtype=np.float32))
    assert b.shape == (2, 5, 5)
    assert not b.any()


def test_conv3d_rejects_wrong_rank():
    with pytest.raises(ValueError):
        conv3d(np.zeros((4, 4)))