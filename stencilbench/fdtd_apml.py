"""Finite-difference time-domain kernel with an anisotropic perfectly matched layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from stencilbench.util import Dataset

APML_DTYPE = np.float64
MUI = 2341.0
CH = 42.0


class ApmlSizes(NamedTuple):
    cz: int
    cym: int
    cxm: int


_APML_SIZES = {
    Dataset.MINI: ApmlSizes(32, 32, 32),
    Dataset.SMALL: ApmlSizes(64, 64, 64),
    Dataset.STANDARD: ApmlSizes(256, 256, 256),
    Dataset.LARGE: ApmlSizes(512, 512, 512),
    Dataset.EXTRALARGE: ApmlSizes(1000, 1000, 1000),
}


@dataclass
class ApmlState:
    """Every field, coefficient and scratch array the kernel works on."""

    mui: float
    ch: float
    ax: np.ndarray
    ry: np.ndarray
    clf: np.ndarray
    tmp: np.ndarray
    bza: np.ndarray
    ex: np.ndarray
    ey: np.ndarray
    hz: np.ndarray
    czm: np.ndarray
    czp: np.ndarray
    cxmh: np.ndarray
    cxph: np.ndarray
    cymh: np.ndarray
    cyph: np.ndarray

    @property
    def cz(self) -> int:
        return self.hz.shape[0] - 1

    @property
    def cym(self) -> int:
        return self.hz.shape[1] - 1

    @property
    def cxm(self) -> int:
        return self.hz.shape[2] - 1


def apml_sizes(dataset: Dataset | str = Dataset.STANDARD) -> ApmlSizes:
    """Return (cz, cym, cxm) of a preset; the standard preset is the default."""
    return _APML_SIZES[Dataset.parse(dataset)]


def init_fdtd_apml(cz: int, cxm: int, cym: int) -> ApmlState:
    """Build the initial state for a cz by cym by cxm grid."""
    for name, value in (("cz", cz), ("cxm", cxm), ("cym", cym)):
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")

    def ramp(length: int, offset: int) -> np.ndarray:
        return (np.arange(length + 1, dtype=APML_DTYPE) + offset) / cxm

    i2 = np.arange(cz + 1, dtype=APML_DTYPE)[:, None]
    j2 = np.arange(cym + 1, dtype=APML_DTYPE)[None, :]
    i3 = i2[:, :, None]
    j3 = j2[:, :, None]
    k3 = np.arange(cxm + 1, dtype=APML_DTYPE)[None, None, :]

    return ApmlState(
        mui=MUI,
        ch=CH,
        ax=(i2 * (j2 + 2) + 11) / cym,
        ry=(i2 * (j2 + 1) + 10) / cym,
        clf=np.zeros((cz + 1, cym + 1), dtype=APML_DTYPE),
        tmp=np.zeros((cz + 1, cym + 1), dtype=APML_DTYPE),
        bza=np.zeros((cz + 1, cym + 1, cxm + 1), dtype=APML_DTYPE),
        ex=(i3 * (j3 + 3) + k3 + 1) / cxm,
        ey=(i3 * (j3 + 4) + k3 + 2) / cym,
        hz=(i3 * (j3 + 5) + k3 + 3) / cz,
        czm=ramp(cz, 1),
        czp=ramp(cz, 2),
        cxmh=ramp(cxm, 3),
        cxph=ramp(cxm, 4),
        cymh=ramp(cym, 5),
        cyph=ramp(cym, 6),
    )


def _validate(state: ApmlState) -> tuple[int, int, int]:
    cz, cym, cxm = state.cz, state.cym, state.cxm
    grid = (cz + 1, cym + 1, cxm + 1)
    for name in ("bza", "ex", "ey"):
        if getattr(state, name).shape != grid:
            raise ValueError(f"{name} has shape {getattr(state, name).shape}, expected {grid}")
    for name in ("ax", "ry", "clf", "tmp"):
        shape = getattr(state, name).shape
        if len(shape) != 2 or shape[0] < cz + 1 or shape[1] < cym + 1:
            raise ValueError(f"{name} has shape {shape}, too small for the grid")
    if state.ax.shape[1] < cxm + 1:
        raise ValueError(f"ax needs at least {cxm + 1} columns, has {state.ax.shape[1]}")
    for name, length in (
        ("czm", cz + 1), ("czp", cz + 1),
        ("cxmh", cxm + 1), ("cxph", cxm + 1),
        ("cymh", cym + 1), ("cyph", cym + 1),
    ):
        if getattr(state, name).shape != (length,):
            raise ValueError(f"{name} must have length {length}")
    return cz, cym, cxm


def fdtd_apml(state: ApmlState) -> None:
    """Run one sweep of the kernel, updating ``state`` in place."""
    cz, cym, cxm = _validate(state)
    s = state
    mui, ch = s.mui, s.ch

    # Interior rows iy < cym: every cell reads only unchanged fields and its own Bza.
    ey_next = np.concatenate((s.ey[:cz, :cym, 1:], s.ry[:cz, :cym, None]), axis=2)
    clf = s.ex[:cz, :cym, :] - s.ex[:cz, 1 : cym + 1, :] + ey_next - s.ey[:cz, :cym, :]
    row_scale = (s.cymh[:cym] / s.cyph[:cym])[None, :, None]
    row_ch = (ch / s.cyph[:cym])[None, :, None]
    bza = s.bza[:cz, :cym, :]
    tmp = row_scale * bza - row_ch * clf
    x_scale = s.cxmh / s.cxph
    zp = (mui * s.czp[:cz])[:, None, None] / s.cxph
    zm = (mui * s.czm[:cz])[:, None, None] / s.cxph
    s.hz[:cz, :cym, :] = x_scale * s.hz[:cz, :cym, :] + zp * tmp - zm * bza
    s.bza[:cz, :cym, :] = tmp

    # Boundary row iy == cym: rewritten once for every interior row, in order.
    edge_clf = (
        s.ex[:cz, cym, :cxm] - s.ax[:cz, :cxm]
        + s.ey[:cz, cym, 1 : cxm + 1] - s.ey[:cz, cym, :cxm]
    )
    corner_clf = s.ex[:cz, cym, cxm] - s.ax[:cz, cxm] + s.ry[:cz, cym] - s.ey[:cz, cym, cxm]
    edge_zp = zp[:, 0, :cxm]
    edge_zm = zm[:, 0, :cxm]
    corner_zp = zp[:, 0, cxm]
    corner_zm = zm[:, 0, cxm]
    corner_scale = s.cymh[cym] / s.cyph[cym]
    corner_ch = ch / s.cyph[cym]

    for iy in range(cym):
        edge_tmp = (s.cymh[cym] / s.cyph[iy]) * s.bza[:cz, iy, :cxm] - (ch / s.cyph[iy]) * edge_clf
        s.hz[:cz, cym, :cxm] = (
            x_scale[:cxm] * s.hz[:cz, cym, :cxm]
            + edge_zp * edge_tmp
            - edge_zm * s.bza[:cz, cym, :cxm]
        )
        s.bza[:cz, cym, :cxm] = edge_tmp

        corner_tmp = corner_scale * s.bza[:cz, cym, cxm] - corner_ch * corner_clf
        s.hz[:cz, cym, cxm] = (
            x_scale[cxm] * s.hz[:cz, cym, cxm]
            + corner_zp * corner_tmp
            - corner_zm * s.bza[:cz, cym, cxm]
        )
        s.bza[:cz, cym, cxm] = corner_tmp
        s.clf[:cz, iy] = corner_clf
        s.tmp[:cz, iy] = corner_tmp