"""Three-dimensional Jacobi star stencils of radius one and two."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from stencilbench.util import DATA_TYPE

# Weights in the order (i+d, i-d, j+d, j-d, k+d, k-d, centre), where i runs
# over the first (slowest) axis and k over the last (fastest) one.
STAR_COEFFICIENTS = (0.2, 2.0, 0.2, 2.0, 0.2, 2.0, 0.2)
JACOBI3D_COEFFICIENTS = (1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0)


def _check_positive(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _check_offsets(**offsets: int) -> None:
    for name, value in offsets.items():
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}")


def _halo_mask(x: int, y: int, z: int, offset_x: int, offset_y: int, offset_z: int) -> np.ndarray:
    i = np.arange(z)[:, None, None]
    j = np.arange(y)[None, :, None]
    k = np.arange(x)[None, None, :]
    return (
        (i < offset_z) | (j < offset_y) | (i >= z - offset_z)
        | (j >= y - offset_y) | (k < offset_x) | (k >= x - offset_x)
    )


def init_ones(x: int, y: int, z: int, offset_x: int, offset_y: int, offset_z: int) -> np.ndarray:
    """Return a (z, y, x) grid of ones with a zero halo of the given widths."""
    _check_positive(x=x, y=y, z=z)
    _check_offsets(offset_x=offset_x, offset_y=offset_y, offset_z=offset_z)
    mask = _halo_mask(x, y, z, offset_x, offset_y, offset_z)
    return np.where(mask, DATA_TYPE(0), DATA_TYPE(1)).astype(DATA_TYPE)


def init_gradient(x: int, y: int, z: int, offset_x: int, offset_y: int, offset_z: int) -> np.ndarray:
    """Return a (z, y, x) grid with A[i, j, k] = (i + j + x - k) * 10 / x inside a zero halo."""
    _check_positive(x=x, y=y, z=z)
    _check_offsets(offset_x=offset_x, offset_y=offset_y, offset_z=offset_z)
    i = np.arange(z)[:, None, None]
    j = np.arange(y)[None, :, None]
    k = np.arange(x)[None, None, :]
    ramp = (i + j + (x - k)).astype(DATA_TYPE) * DATA_TYPE(10) / DATA_TYPE(x)
    mask = _halo_mask(x, y, z, offset_x, offset_y, offset_z)
    return np.where(mask, DATA_TYPE(0), ramp).astype(DATA_TYPE)


def _apply(a: np.ndarray, b: np.ndarray, radius: int, weights: tuple) -> None:
    z, y, x = a.shape
    r = radius
    plus_i, minus_i, plus_j, minus_j, plus_k, minus_k, centre = weights
    zi, yi, xi = slice(r, z - r), slice(r, y - r), slice(r, x - r)

    terms = []
    for d in range(r, 0, -1):
        terms.append((plus_i, a[r + d : z - r + d, yi, xi]))
        terms.append((minus_i, a[r - d : z - r - d, yi, xi]))
    for d in range(r, 0, -1):
        terms.append((plus_j, a[zi, r + d : y - r + d, xi]))
        terms.append((minus_j, a[zi, r - d : y - r - d, xi]))
    for d in range(r, 0, -1):
        terms.append((plus_k, a[zi, yi, r + d : x - r + d]))
        terms.append((minus_k, a[zi, yi, r - d : x - r - d]))
    terms.append((centre, a[zi, yi, xi]))

    acc = np.zeros((z - 2 * r, y - 2 * r, x - 2 * r), dtype=DATA_TYPE)
    for weight, view in terms:
        acc += weight * view
    b[zi, yi, xi] = acc


def _copy_back(a: np.ndarray, b: np.ndarray, radius: int) -> None:
    """Copy B's interior into A, using z as the row stride of the destination."""
    z, y, x = a.shape
    r = radius
    if z == x:
        a[r : z - r, r : y - r, r : x - r] = b[r : z - r, r : y - r, r : x - r]
        return
    flat = a.reshape(-1)
    plane = x * y
    width = x - 2 * r
    for i in range(r, z - r):
        for j in range(r, y - r):
            start = i * plane + j * z + r
            flat[start : start + width] = b[i, j, r : x - r]


def _check_copy_fits(shape: tuple[int, int, int], radius: int) -> None:
    z, y, x = shape
    r = radius
    last_stop = (z - r - 1) * x * y + (y - r - 1) * z + (x - r)
    if last_stop > z * y * x:
        raise ValueError(
            f"grid of shape {shape} is too small for a row stride of {z} in the copy-back"
        )


def star_stencil(a, tsteps: int, radius: int, coefficients: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """Run ``tsteps`` sweeps of a star stencil over a (z, y, x) grid; return (A, B).

    Each sweep writes every point at least ``radius`` from the border of B
    from A, then copies B's interior back into A. The input is not modified;
    B starts at zero, so its border stays zero.
    """
    if tsteps < 0:
        raise ValueError(f"tsteps must not be negative, got {tsteps}")
    if radius < 1:
        raise ValueError(f"radius must be positive, got {radius}")
    weights = tuple(DATA_TYPE(c) for c in coefficients)
    if len(weights) != 7:
        raise ValueError(f"expected 7 coefficients, got {len(weights)}")
    arr = np.array(a, dtype=DATA_TYPE, copy=True)
    if arr.ndim != 3:
        raise ValueError(f"a must be three-dimensional, got shape {arr.shape}")
    out = np.zeros_like(arr)
    if min(arr.shape) <= 2 * radius:
        return arr, out
    if tsteps > 0 and arr.shape[0] != arr.shape[2]:
        _check_copy_fits(arr.shape, radius)
    for _ in range(tsteps):
        _apply(arr, out, radius, weights)
        _copy_back(arr, out, radius)
    return arr, out


def jacobi3d(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Seven-point stencil with every weight equal to one."""
    return star_stencil(a, tsteps, 1, JACOBI3D_COEFFICIENTS)


def jacobi3d7pt(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Seven-point stencil of radius one with the star weights."""
    return star_stencil(a, tsteps, 1, STAR_COEFFICIENTS)


def jacobi3d13pt(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Thirteen-point stencil of radius two with the star weights."""
    return star_stencil(a, tsteps, 2, STAR_COEFFICIENTS)


def check_result(a, ref) -> bool:
    """Return whether two grids are exactly equal; report the first difference."""
    got = np.asarray(a)
    expected = np.asarray(ref)
    if got.shape != expected.shape:
        raise ValueError(f"shape mismatch: {got.shape} != {expected.shape}")
    differing = np.argwhere(got != expected)
    if differing.size == 0:
        return True
    pos = tuple(int(v) for v in differing[0])
    print(
        "Expected: %f, received: %f at position [%s]"
        % (float(expected[pos]), float(got[pos]), ",".join(str(v) for v in pos))
    )
    return False