import dataclasses

import numpy as np
import pytest

from stencilbench.fdtd_apml import ApmlState, apml_sizes, fdtd_apml, init_fdtd_apml
from stencilbench.util import Dataset


def _clone(state: ApmlState) -> ApmlState:
    values = {}
    for field in dataclasses.fields(state):
        value = getattr(state, field.name)
        values[field.name] = value.copy() if isinstance(value, np.ndarray) else value
    return ApmlState(**values)


def test_apml_sizes_presets():
    assert tuple(apml_sizes()) == (256, 256, 256)
    assert tuple(apml_sizes("mini")) == (32, 32, 32)
    assert tuple(apml_sizes(Dataset.EXTRALARGE)) == (1000, 1000, 1000)


def test_apml_sizes_unknown():
    with pytest.raises(ValueError):
        apml_sizes("medium")


def test_init_shapes_and_constants():
    state = init_fdtd_apml(3, 5, 6)
    assert state.mui == 2341
    assert state.ch == 42
    assert state.ex.shape == (4, 7, 6)
    assert state.ax.shape == (4, 7)
    assert state.czm.shape == (4,)
    assert state.cxph.shape == (6,)
    assert state.cyph.shape == (7,)
    assert (state.cz, state.cym, state.cxm) == (3, 6, 5)
    assert not state.bza.any()


def test_init_values_follow_formulas():
    state = init_fdtd_apml(4, 4, 4)
    assert state.ex[0, 0, 0] == pytest.approx(1 / 4)
    assert state.czp[0] == pytest.approx(2 / 4)
    assert np.allclose(np.diff(state.czm), 1 / 4)
    assert np.allclose(state.cxph - state.cxmh, 1 / 4)


def test_init_rejects_bad_sizes():
    with pytest.raises(ValueError):
        init_fdtd_apml(0, 2, 2)


def test_kernel_leaves_inputs_unchanged():
    state = init_fdtd_apml(3, 3, 4)
    before = _clone(state)
    fdtd_apml(state)
    for name in ("ex", "ey", "ax", "ry", "czm", "czp", "cxmh", "cxph", "cymh", "cyph"):
        assert np.array_equal(getattr(state, name), getattr(before, name)), name


def test_kernel_updates_only_planes_below_cz():
    state = init_fdtd_apml(3, 3, 3)
    before = _clone(state)
    fdtd_apml(state)
    assert np.array_equal(state.hz[3], before.hz[3])
    assert not state.bza[3].any()
    assert not np.array_equal(state.hz[:3], before.hz[:3])
    assert state.bza[:3].any()


def test_zero_fields_stay_zero():
    state = init_fdtd_apml(2, 3, 3)
    for name in ("ex", "ey", "ax", "ry", "hz", "bza"):
        getattr(state, name)[...] = 0.0
    fdtd_apml(state)
    assert not state.hz.any()
    assert not state.bza.any()


def test_kernel_is_homogeneous():
    state = init_fdtd_apml(3, 3, 4)
    state.bza[...] = state.ex * 0.5
    scaled = _clone(state)
    for name in ("ex", "ey", "ax", "ry", "hz", "bza"):
        getattr(scaled, name)[...] *= 3.0
    fdtd_apml(state)
    fdtd_apml(scaled)
    assert np.allclose(scaled.hz, 3.0 * state.hz, rtol=1e-9)
    assert np.allclose(scaled.bza, 3.0 * state.bza, rtol=1e-9)


def test_bza_does_not_depend_on_hz():
    first = init_fdtd_apml(2, 3, 3)
    second = _clone(first)
    second.hz[...] = 7.0
    fdtd_apml(first)
    fdtd_apml(second)
    assert np.array_equal(first.bza, second.bza)
    assert not np.array_equal(first.hz, second.hz)


def test_kernel_is_deterministic():
    first = init_fdtd_apml(2, 2, 3)
    second = _clone(first)
    fdtd_apml(first)
    fdtd_apml(second)
    assert np.array_equal(first.hz, second.hz)
    assert np.array_equal(first.tmp, second.tmp)


def test_kernel_rejects_cxm_larger_than_cym():
    state = init_fdtd_apml(2, 4, 2)
    with pytest.raises(ValueError):
        fdtd_apml(state)


def test_kernel_rejects_mismatched_shapes():
    state = init_fdtd_apml(2, 2, 2)
    state.ex = np.zeros((2, 2, 2))
    with pytest.raises(ValueError):
        fdtd_apml(state)