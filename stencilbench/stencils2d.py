"""One- and two-dimensional iterative stencils: jacobi, seidel, adi and fdtd."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from stencilbench.util import DATA_TYPE, Dataset

DOUBLE_TYPE = np.float64

JACOBI1D_C1 = 0.33333
JACOBI2D_C1 = 0.2
# The 2-D jacobi sweep counts its time steps from 10, so only
# ``tsteps - 10`` sweeps are ever run.
JACOBI2D_FIRST_STEP = 10
FDTD_EY_FACTOR = 0.5
FDTD_HZ_FACTOR = 0.7


class StepSizes(NamedTuple):
    """Time steps and grid edge of a square or linear stencil."""

    tsteps: int
    n: int


class Fdtd2dSizes(NamedTuple):
    """Time steps and grid shape of the 2-D fdtd kernel."""

    tmax: int
    nx: int
    ny: int


_SIZES: dict[str, dict[Dataset, NamedTuple]] = {
    "jacobi1d": {
        Dataset.MINI: StepSizes(2, 500),
        Dataset.SMALL: StepSizes(10, 1000),
        Dataset.STANDARD: StepSizes(100, 10000),
        Dataset.LARGE: StepSizes(1000, 100000),
        Dataset.EXTRALARGE: StepSizes(1000, 1000000),
    },
    "jacobi2d": {
        Dataset.MINI: StepSizes(2, 32),
        Dataset.SMALL: StepSizes(10, 500),
        Dataset.STANDARD: StepSizes(20, 1000),
        Dataset.LARGE: StepSizes(20, 2000),
        Dataset.EXTRALARGE: StepSizes(100, 4000),
    },
    "seidel2d": {
        Dataset.MINI: StepSizes(2, 32),
        Dataset.SMALL: StepSizes(10, 500),
        Dataset.STANDARD: StepSizes(20, 1000),
        Dataset.LARGE: StepSizes(20, 2000),
        Dataset.EXTRALARGE: StepSizes(100, 4000),
    },
    "adi": {
        Dataset.MINI: StepSizes(2, 32),
        Dataset.SMALL: StepSizes(10, 500),
        Dataset.STANDARD: StepSizes(50, 1024),
        Dataset.LARGE: StepSizes(50, 2000),
        Dataset.EXTRALARGE: StepSizes(100, 4000),
    },
    "fdtd2d": {
        Dataset.MINI: Fdtd2dSizes(2, 32, 32),
        Dataset.SMALL: Fdtd2dSizes(10, 500, 500),
        Dataset.STANDARD: Fdtd2dSizes(50, 1000, 1000),
        Dataset.LARGE: Fdtd2dSizes(50, 2000, 2000),
        Dataset.EXTRALARGE: Fdtd2dSizes(100, 4000, 4000),
    },
}


def problem_sizes(benchmark: str, dataset: Dataset | str = Dataset.STANDARD) -> NamedTuple:
    """Return the sizes a benchmark uses for a preset; standard by default.

    ``benchmark`` is one of jacobi-1d, jacobi-2d, seidel-2d, adi or fdtd-2d;
    dashes, underscores and case are ignored.
    """
    key = "".join(ch for ch in str(benchmark).lower() if ch.isalnum())
    try:
        table = _SIZES[key]
    except KeyError:
        raise ValueError(f"unknown benchmark: {benchmark!r}") from None
    return table[Dataset.parse(dataset)]


def _check_positive(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _check_steps(tsteps: int) -> None:
    if tsteps < 0:
        raise ValueError(f"tsteps must not be negative, got {tsteps}")


def _array(value, name: str, ndim: int, dtype) -> np.ndarray:
    arr = np.array(value, dtype=dtype, copy=True)
    if arr.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got shape {arr.shape}")
    return arr


def _grid(n: int, scale: int, offset: int, dtype) -> np.ndarray:
    i = np.arange(n, dtype=dtype)[:, None]
    j = np.arange(n, dtype=dtype)[None, :]
    return np.ascontiguousarray((i * (j + scale) + offset) / n, dtype=dtype)


def init_jacobi1d(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Return A with A[i] = (i+2)/n and B with B[i] = (i+3)/n."""
    _check_positive(n=n)
    i = np.arange(n, dtype=DATA_TYPE)
    return ((i + 2) / n).astype(DATA_TYPE), ((i + 3) / n).astype(DATA_TYPE)


def jacobi1d(a, b, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Run ``tsteps`` three-point sweeps; return the new (A, B).

    Each sweep writes the interior of B from A, then copies every element of
    B but the last back into A.
    """
    _check_steps(tsteps)
    a = _array(a, "a", 1, DATA_TYPE)
    b = _array(b, "b", 1, DATA_TYPE)
    if a.shape != b.shape:
        raise ValueError(f"a and b differ in shape: {a.shape} != {b.shape}")
    c1 = DATA_TYPE(JACOBI1D_C1)
    for _ in range(tsteps):
        b[1:-1] = c1 * (a[:-2] + a[1:-1] + a[2:])
        a[:-1] = b[:-1]
    return a, b


def init_jacobi2d(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Return A = (i*(j+2)+2)/n and B = (i*(j+3)+3)/n, both n x n."""
    _check_positive(n=n)
    return _grid(n, 2, 2, DATA_TYPE), _grid(n, 3, 3, DATA_TYPE)


def jacobi2d(a, b, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Run the five-point sweeps for steps 10 .. tsteps-1; return (A, B)."""
    _check_steps(tsteps)
    a = _array(a, "a", 2, DATA_TYPE)
    b = _array(b, "b", 2, DATA_TYPE)
    if a.shape != b.shape:
        raise ValueError(f"a and b differ in shape: {a.shape} != {b.shape}")
    c1 = DATA_TYPE(JACOBI2D_C1)
    for _ in range(JACOBI2D_FIRST_STEP, tsteps):
        b[1:-1, 1:-1] = c1 * (
            a[1:-1, 1:-1] + a[1:-1, :-2] + a[1:-1, 2:] + a[2:, 1:-1] + a[:-2, 1:-1]
        )
        a[1:-1, 1:-1] = b[1:-1, 1:-1]
    return a, b


def init_seidel2d(n: int) -> np.ndarray:
    """Return the n x n grid A = (i*(j+2)+2)/n."""
    _check_positive(n=n)
    return _grid(n, 2, 2, DOUBLE_TYPE)


def seidel2d(a, tsteps: int) -> np.ndarray:
    """Run ``tsteps`` in-place Gauss-Seidel nine-point averaging sweeps."""
    _check_steps(tsteps)
    a = _array(a, "a", 2, DOUBLE_TYPE)
    rows = a.shape[0]
    for _ in range(tsteps):
        for i in range(1, rows - 1):
            up, mid, down = a[i - 1], a[i], a[i + 1]
            # Everything but the left neighbour, which is updated on the way.
            rest = (
                up[:-2] + up[1:-1] + up[2:]
                + mid[1:-1] + mid[2:]
                + down[:-2] + down[1:-1] + down[2:]
            )
            left = float(mid[0])
            updated = []
            for partial in rest.tolist():
                left = (left + partial) / 9.0
                updated.append(left)
            mid[1:-1] = updated
    return a


def init_adi(n: int) -> np.ndarray:
    """Return the n x n starting field u = (i*(j+1)+1)/n."""
    _check_positive(n=n)
    return _grid(n, 1, 1, DOUBLE_TYPE)


def adi(u, tsteps: int) -> np.ndarray:
    """Run ``tsteps`` alternating-direction implicit column and row sweeps."""
    _check_steps(tsteps)
    u = _array(u, "u", 2, DOUBLE_TYPE)
    n = u.shape[0]
    if u.shape[1] != n or n < 1:
        raise ValueError(f"u must be a non-empty square grid, got shape {u.shape}")
    if tsteps == 0:
        return u

    dx = 1.0 / n
    dy = 1.0 / n
    dt = 1.0 / tsteps
    mul1 = 2.0 * dt / (dx * dx)
    mul2 = 1.0 * dt / (dy * dy)
    a = -mul1 / 2.0
    b = 1.0 + mul1
    c = a
    d = -mul2 / 2.0
    e = 1.0 + mul2
    f = d

    v = np.zeros_like(u)
    p = np.zeros_like(u)
    q = np.zeros_like(u)
    inner = slice(1, n - 1)

    for _ in range(tsteps):
        # Column sweep: solve along the columns of u into v.
        v[0, inner] = 1.0
        p[inner, 0] = 0.0
        q[inner, 0] = v[0, inner]
        for j in range(1, n - 1):
            denom = a * p[inner, j - 1] + b
            p[inner, j] = -c / denom
            q[inner, j] = (
                -d * u[j, : n - 2]
                + (1.0 + 2.0 * d) * u[j, inner]
                - f * u[j, 2:]
                - a * q[inner, j - 1]
            ) / denom
        v[n - 1, inner] = 1.0
        for j in range(n - 2, 0, -1):
            v[j, inner] = p[inner, j] * v[j + 1, inner] + q[inner, j]

        # Row sweep: solve along the rows of v back into u.
        u[inner, 0] = 1.0
        p[inner, 0] = 0.0
        q[inner, 0] = u[inner, 0]
        for j in range(1, n - 1):
            denom = d * p[inner, j - 1] + e
            p[inner, j] = -f / denom
            q[inner, j] = (
                -a * v[: n - 2, j]
                + (1.0 + 2.0 * a) * v[inner, j]
                - c * v[2:, j]
                - d * q[inner, j - 1]
            ) / denom
        u[inner, n - 1] = 1.0
        for j in range(n - 2, 0, -1):
            u[inner, j] = p[inner, j] * u[inner, j + 1] + q[inner, j]
    return u


def init_fdtd2d(tmax: int, nx: int, ny: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return (fict, ex, ey, hz) with shapes (tmax,), (nx, ny+1), (nx+1, ny), (nx, ny).

    The extra column of ex and extra row of ey start at zero.
    """
    if tmax < 0:
        raise ValueError(f"tmax must not be negative, got {tmax}")
    _check_positive(nx=nx, ny=ny)
    fict = np.arange(tmax, dtype=DATA_TYPE)
    i = np.arange(nx, dtype=DATA_TYPE)[:, None]
    j = np.arange(ny, dtype=DATA_TYPE)[None, :]
    ex = np.zeros((nx, ny + 1), dtype=DATA_TYPE)
    ey = np.zeros((nx + 1, ny), dtype=DATA_TYPE)
    ex[:, :ny] = (i * (j + 1) + 1) / nx
    ey[:nx, :] = ((i - 1) * (j + 2) + 2) / nx
    hz = np.ascontiguousarray(((i - 9) * (j + 4) + 3) / nx, dtype=DATA_TYPE)
    return fict, ex, ey, hz


def fdtd2d(fict, ex, ey, hz) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Run one time step for each value of ``fict``; return the new (ex, ey, hz)."""
    fict = _array(fict, "fict", 1, DATA_TYPE)
    hz = _array(hz, "hz", 2, DATA_TYPE)
    ex = _array(ex, "ex", 2, DATA_TYPE)
    ey = _array(ey, "ey", 2, DATA_TYPE)
    nx, ny = hz.shape
    if ex.shape != (nx, ny + 1):
        raise ValueError(f"ex has shape {ex.shape}, expected {(nx, ny + 1)}")
    if ey.shape != (nx + 1, ny):
        raise ValueError(f"ey has shape {ey.shape}, expected {(nx + 1, ny)}")

    for value in fict:
        ey[0, :] = value
        ey[1:nx, :] -= FDTD_EY_FACTOR * (hz[1:, :] - hz[:-1, :])
        ex[:, 1:ny] -= FDTD_EY_FACTOR * (hz[:, 1:] - hz[:, :-1])
        hz -= FDTD_HZ_FACTOR * (ex[:, 1:] - ex[:, :ny] + ey[1:, :] - ey[:nx, :])
    return ex, ey, hz