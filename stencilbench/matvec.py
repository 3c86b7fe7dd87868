"""Matrix-vector kernels: atax, bicg, gesummv and mvt."""

from __future__ import annotations

import math

import numpy as np

from stencilbench.util import DATA_TYPE

GESUMMV_ALPHA = 43532.0
GESUMMV_BETA = 12313.0


def _check_sizes(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _matrix(value, name: str) -> np.ndarray:
    arr = np.asarray(value)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be two-dimensional, got shape {arr.shape}")
    return arr


def _vector(value, name: str, length: int) -> np.ndarray:
    arr = np.asarray(value)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.shape[0] != length:
        raise ValueError(f"{name} has length {arr.shape[0]}, expected {length}")
    return arr


def _grid(rows: int, cols: int, divisor: float) -> np.ndarray:
    i = np.arange(rows, dtype=DATA_TYPE)[:, None]
    j = np.arange(cols, dtype=DATA_TYPE)[None, :]
    return np.ascontiguousarray(i * j / divisor, dtype=DATA_TYPE)


def _pi_ramp(length: int) -> np.ndarray:
    return (np.arange(length, dtype=np.float64) * math.pi).astype(DATA_TYPE)


def init_atax(nx: int, ny: int) -> tuple[np.ndarray, np.ndarray]:
    """Return A (nx x ny) with A[i, j] = i*j/nx and x with x[i] = i*pi."""
    _check_sizes(nx=nx, ny=ny)
    return _grid(nx, ny, nx), _pi_ramp(ny)


def atax(a, x) -> tuple[np.ndarray, np.ndarray]:
    """Compute tmp = A.x and y = A^T.tmp; return (y, tmp)."""
    a = _matrix(a, "a")
    x = _vector(x, "x", a.shape[1])
    tmp = a @ x
    return a.T @ tmp, tmp


def init_bicg(nx: int, ny: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return A (nx x ny), r (length nx) and p (length ny)."""
    _check_sizes(nx=nx, ny=ny)
    return _grid(nx, ny, nx), _pi_ramp(nx), _pi_ramp(ny)


def bicg(a, r, p) -> tuple[np.ndarray, np.ndarray]:
    """Compute s = A^T.r and q = A.p; return (s, q)."""
    a = _matrix(a, "a")
    r = _vector(r, "r", a.shape[0])
    p = _vector(p, "p", a.shape[1])
    return a.T @ r, a @ p


def init_gesummv(n: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return A and B (n x n, both i*j/n) and x with x[i] = i/n."""
    _check_sizes(n=n)
    a = _grid(n, n, n)
    b = a.copy()
    x = (np.arange(n, dtype=DATA_TYPE) / n).astype(DATA_TYPE)
    return a, b, x


def gesummv(a, b, x, alpha: float = GESUMMV_ALPHA, beta: float = GESUMMV_BETA) -> tuple[np.ndarray, np.ndarray]:
    """Compute tmp = A.x and y = alpha*tmp + beta*B.x; return (y, tmp)."""
    a, b = _matrix(a, "a"), _matrix(b, "b")
    if a.shape[0] != a.shape[1]:
        raise ValueError(f"a must be square, got shape {a.shape}")
    if b.shape != a.shape:
        raise ValueError(f"b has shape {b.shape}, expected {a.shape}")
    x = _vector(x, "x", a.shape[1])
    tmp = a @ x
    return alpha * tmp + beta * (b @ x), tmp


def init_mvt(n: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return A, x1, x2, y1 and y2 for a problem of size n."""
    _check_sizes(n=n)
    i = np.arange(n, dtype=DATA_TYPE)
    x1 = (i / n).astype(DATA_TYPE)
    x2 = ((i + 1) / n).astype(DATA_TYPE)
    y1 = ((i + 3) / n).astype(DATA_TYPE)
    y2 = ((i + 4) / n).astype(DATA_TYPE)
    return _grid(n, n, n), x1, x2, y1, y2


def mvt(a, x1, x2, y1, y2) -> tuple[np.ndarray, np.ndarray]:
    """Return (x1 + A.y1, x2 + A^T.y2)."""
    a = _matrix(a, "a")
    n = a.shape[0]
    if a.shape[1] != n:
        raise ValueError(f"a must be square, got shape {a.shape}")
    x1 = _vector(x1, "x1", n)
    x2 = _vector(x2, "x2", n)
    y1 = _vector(y1, "y1", n)
    y2 = _vector(y2, "y2", n)
    return x1 + a @ y1, x2 + a.T @ y2