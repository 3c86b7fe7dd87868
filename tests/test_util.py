import math

import numpy as np
import pytest

from stencilbench.util import (
    Dataset,
    DatasetSizes,
    abs_val,
    count_mismatches,
    dataset_sizes,
    percent_diff,
    rtclock,
    timed,
)


def test_default_dataset_is_standard():
    assert dataset_sizes() == dataset_sizes(Dataset.STANDARD)


def test_mini_sizes():
    sizes = dataset_sizes(Dataset.MINI)
    assert isinstance(sizes, DatasetSizes)
    assert sizes.n == 32
    assert sizes.nq == 10
    assert sizes.large_n == 500
    assert sizes.tsteps == 2


def test_large_large_n():
    assert dataset_sizes(Dataset.LARGE).large_n == 2048 * 2048


def test_extralarge_sizes():
    sizes = dataset_sizes(Dataset.EXTRALARGE)
    assert sizes.nx == 100000
    assert sizes.maxgrid == 512


@pytest.mark.parametrize("name", ["mini", "MINI", "MINI_DATASET", " mini_dataset "])
def test_dataset_names(name):
    assert dataset_sizes(name) == dataset_sizes(Dataset.MINI)


def test_unknown_dataset():
    with pytest.raises(ValueError):
        dataset_sizes("medium")


def test_dataset_bad_type():
    with pytest.raises(TypeError):
        Dataset.parse(3)


def test_abs_val():
    assert abs_val(-2.5) == 2.5
    assert abs_val(4.0) == 4.0
    assert abs_val(0.0) == 0.0


def test_percent_diff_small_values():
    assert percent_diff(0.005, -0.009) == 0.0


def test_percent_diff_equal():
    assert percent_diff(100.0, 100.0) == 0.0


def test_percent_diff_one_percent():
    assert percent_diff(100.0, 101.0) == pytest.approx(1.0, rel=1e-6)


def test_percent_diff_zero_denominator():
    result = percent_diff(-0.00000001, 5.0)
    assert result == math.inf


def test_count_mismatches_identical():
    data = np.linspace(1.0, 10.0, 20)
    assert count_mismatches(data, data.copy(), 0.05) == 0


def test_count_mismatches_counts_perturbed():
    data = np.linspace(1.0, 10.0, 20).reshape(4, 5)
    other = data.copy()
    other[1, 2] *= 2
    other[3, 4] *= 1.5
    assert count_mismatches(data, other, 0.05) == 2


def test_count_mismatches_ignores_near_zero():
    assert count_mismatches([0.001, 0.002], [0.009, -0.005], 0.05) == 0


def test_count_mismatches_agrees_with_percent_diff():
    expected = [1.0, 2.0, 3.0, 50.0]
    actual = [1.0, 2.5, 3.001, 60.0]
    threshold = 1.05
    scalar = sum(percent_diff(e, a) > threshold for e, a in zip(expected, actual))
    assert count_mismatches(expected, actual, threshold) == scalar


def test_count_mismatches_shape_error():
    with pytest.raises(ValueError):
        count_mismatches(np.zeros(3), np.zeros(4), 0.05)


def test_rtclock_advances():
    first = rtclock()
    second = rtclock()
    assert second >= first


def test_timed_returns_result_and_elapsed():
    result, elapsed = timed(sum, [1, 2, 3], start=4)
    assert result == 10
    assert elapsed >= 0.0