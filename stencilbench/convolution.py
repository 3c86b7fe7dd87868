"""Two- and three-dimensional convolution stencils."""

from __future__ import annotations

from itertools import product
from typing import NamedTuple

import numpy as np

from stencilbench.util import DATA_TYPE, Dataset

# Weight of A[i + di, j + dj] in the 2-D filter, keyed by (di, dj).
CONV2D_TAPS = {
    (-1, -1): 0.2,
    (0, -1): -0.3,
    (1, -1): 0.4,
    (-1, 0): 0.5,
    (0, 0): 0.6,
    (1, 0): 0.7,
    (-1, 1): -0.8,
    (0, 1): -0.9,
    (1, 1): 0.10,
}

# Weight of A[i + di, j + dj, k + dk] in the 3-D filter depends on di only.
CONV3D_WEIGHTS = {-1: 2.12345, 0: 4.0, 1: 5.0}


class Conv2dSizes(NamedTuple):
    ni: int
    nj: int


class Conv3dSizes(NamedTuple):
    x: int
    y: int
    z: int


_CONV2D_SIZES = {
    Dataset.MINI: Conv2dSizes(64, 64),
    Dataset.SMALL: Conv2dSizes(1024, 1024),
    Dataset.STANDARD: Conv2dSizes(2048, 2048),
    Dataset.LARGE: Conv2dSizes(4096, 4096),
    Dataset.EXTRALARGE: Conv2dSizes(8192, 8192),
}

_CONV3D_SIZES = {
    Dataset.MINI: Conv3dSizes(64, 64, 64),
    Dataset.SMALL: Conv3dSizes(128, 128, 128),
    Dataset.STANDARD: Conv3dSizes(192, 192, 192),
    Dataset.LARGE: Conv3dSizes(256, 256, 256),
    Dataset.EXTRALARGE: Conv3dSizes(384, 384, 384),
}


def _check_sizes(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _array(value, ndim: int) -> np.ndarray:
    arr = np.asarray(value, dtype=DATA_TYPE)
    if arr.ndim != ndim:
        raise ValueError(f"input must be {ndim}-dimensional, got shape {arr.shape}")
    return arr


def conv2d_sizes(dataset: Dataset | str = Dataset.LARGE) -> Conv2dSizes:
    """Return (ni, nj) of a preset; the large preset is the default."""
    return _CONV2D_SIZES[Dataset.parse(dataset)]


def init_conv2d(ni: int, nj: int, seed: int | None = None) -> np.ndarray:
    """Return an ni x nj array of uniform random values in [0, 1)."""
    _check_sizes(ni=ni, nj=nj)
    rng = np.random.default_rng(seed)
    return rng.random((ni, nj), dtype=np.float32).astype(DATA_TYPE)


def conv2d(a) -> np.ndarray:
    """Apply the 3x3 filter to every interior point; the border stays zero."""
    arr = _array(a, 2)
    ni, nj = arr.shape
    out = np.zeros((ni, nj), dtype=DATA_TYPE)
    if ni < 3 or nj < 3:
        return out
    interior = out[1:-1, 1:-1]
    for (di, dj), weight in CONV2D_TAPS.items():
        interior += DATA_TYPE(weight) * arr[1 + di : ni - 1 + di, 1 + dj : nj - 1 + dj]
    return out


def conv3d_sizes(dataset: Dataset | str = Dataset.LARGE) -> Conv3dSizes:
    """Return (x, y, z) of a preset; the large preset is the default."""
    return _CONV3D_SIZES[Dataset.parse(dataset)]


def init_conv3d(x: int, y: int, z: int) -> np.ndarray:
    """Return an x by y by z array with A[i, j, k] = i%12 + 2*(j%7) + 3*(k%13)."""
    _check_sizes(x=x, y=y, z=z)
    i = np.arange(x)[:, None, None]
    j = np.arange(y)[None, :, None]
    k = np.arange(z)[None, None, :]
    return (i % 12 + 2 * (j % 7) + 3 * (k % 13)).astype(DATA_TYPE)


def conv3d(a) -> np.ndarray:
    """Apply the 3x3x3 filter to every interior point; the border stays zero."""
    arr = _array(a, 3)
    x, y, z = arr.shape
    out = np.zeros((x, y, z), dtype=DATA_TYPE)
    if x < 3 or y < 3 or z < 3:
        return out
    interior = out[1:-1, 1:-1, 1:-1]
    for di, dj, dk in product((-1, 0, 1), repeat=3):
        weight = DATA_TYPE(CONV3D_WEIGHTS[di])
        interior += weight * arr[
            1 + di : x - 1 + di,
            1 + dj : y - 1 + dj,
            1 + dk : z - 1 + dk,
        ]
    return out