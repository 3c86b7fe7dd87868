"""Dense matrix-product kernels: 2mm, 3mm, gemm, syrk and syr2k."""

from __future__ import annotations

from typing import Callable, NamedTuple

import numpy as np

from stencilbench.util import DATA_TYPE

GEMM_ALPHA = 32412.0
GEMM_BETA = 2123.0
SYRK_ALPHA = 12435.0
SYRK_BETA = 4546.0


class Mm3Sizes(NamedTuple):
    ni: int
    nj: int
    nk: int
    nl: int
    nm: int


_MM3_SIZES = {
    "mini": Mm3Sizes(16, 18, 20, 22, 24),
    "small": Mm3Sizes(40, 50, 60, 70, 80),
    "medium": Mm3Sizes(180, 190, 200, 210, 220),
    "large": Mm3Sizes(800, 900, 1000, 1100, 1200),
    "extralarge": Mm3Sizes(1600, 1800, 2000, 2200, 2400),
}


def _check_sizes(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _grid(rows: int, cols: int, fill: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> np.ndarray:
    i = np.arange(rows, dtype=DATA_TYPE)[:, None]
    j = np.arange(cols, dtype=DATA_TYPE)[None, :]
    return np.ascontiguousarray(fill(i, j), dtype=DATA_TYPE)


def _matrix(value, name: str) -> np.ndarray:
    arr = np.asarray(value)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be two-dimensional, got shape {arr.shape}")
    return arr


def _require_product(left: np.ndarray, right: np.ndarray, names: str) -> None:
    if left.shape[1] != right.shape[0]:
        raise ValueError(f"cannot multiply {names}: {left.shape} x {right.shape}")


def init_2mm(ni: int, nj: int, nk: int, nl: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the inputs A (ni x nk), B (nk x nj) and D (nj x nl)."""
    _check_sizes(ni=ni, nj=nj, nk=nk, nl=nl)
    a = _grid(ni, nk, lambda i, j: i * j / ni)
    b = _grid(nk, nj, lambda i, j: i * (j + 1) / nj)
    d = _grid(nj, nl, lambda i, j: i * (j + 2) / nk)
    return a, b, d


def mm2(a, b, d) -> tuple[np.ndarray, np.ndarray]:
    """Compute C = A.B and E = C.D; return (C, E)."""
    a, b, d = _matrix(a, "a"), _matrix(b, "b"), _matrix(d, "d")
    _require_product(a, b, "a and b")
    c = a @ b
    _require_product(c, d, "c and d")
    return c, c @ d


def mm3_sizes(dataset_name: str = "large") -> Mm3Sizes:
    """Return (ni, nj, nk, nl, nm) for a named preset; large by default."""
    key = dataset_name.strip().lower()
    if key.endswith("_dataset"):
        key = key[: -len("_dataset")]
    try:
        return _MM3_SIZES[key]
    except KeyError:
        raise ValueError(f"unknown dataset: {dataset_name!r}") from None


def init_3mm(
    ni: int, nj: int, nk: int, nl: int, nm: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return A (ni x nk), B (nk x nj), C (nj x nm) and D (nm x nl)."""
    _check_sizes(ni=ni, nj=nj, nk=nk, nl=nl, nm=nm)
    a = _grid(ni, nk, lambda i, j: i * j / ni)
    b = _grid(nk, nj, lambda i, j: i * (j + 1) / nj)
    c = _grid(nj, nm, lambda i, j: i * (j + 3) / nl)
    d = _grid(nm, nl, lambda i, j: i * (j + 2) / nk)
    return a, b, c, d


def mm3(a, b, c, d) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compute E = A.B, F = C.D and G = E.F; return (E, F, G)."""
    a, b, c, d = (_matrix(m, name) for m, name in ((a, "a"), (b, "b"), (c, "c"), (d, "d")))
    _require_product(a, b, "a and b")
    _require_product(c, d, "c and d")
    e = a @ b
    f = c @ d
    _require_product(e, f, "e and f")
    return e, f, e @ f


def init_gemm(ni: int, nj: int, nk: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return A (ni x nk), B (nk x nj) and C (ni x nj)."""
    _check_sizes(ni=ni, nj=nj, nk=nk)
    a = _grid(ni, nk, lambda i, j: i * j / ni)
    b = _grid(nk, nj, lambda i, j: (i * j + 1) / nj)
    c = _grid(ni, nj, lambda i, j: (i * j + 2) / nj)
    return a, b, c


def gemm(a, b, c, alpha: float = GEMM_ALPHA, beta: float = GEMM_BETA) -> np.ndarray:
    """Return beta*C + alpha*A.B."""
    a, b, c = _matrix(a, "a"), _matrix(b, "b"), _matrix(c, "c")
    _require_product(a, b, "a and b")
    if c.shape != (a.shape[0], b.shape[1]):
        raise ValueError(f"c has shape {c.shape}, expected {(a.shape[0], b.shape[1])}")
    return c * beta + alpha * (a @ b)


def init_syrk(n: int, m: int) -> tuple[np.ndarray, np.ndarray]:
    """Return A (n x m) and the symmetric C (n x n)."""
    _check_sizes(n=n, m=m)
    a = _grid(n, m, lambda i, j: i * j / n)
    c = _grid(n, n, lambda i, j: (i * j + 2) / n)
    return a, c


def syrk(a, c, alpha: float = SYRK_ALPHA, beta: float = SYRK_BETA) -> np.ndarray:
    """Return beta*C + alpha*A.A^T."""
    a, c = _matrix(a, "a"), _matrix(c, "c")
    n = a.shape[0]
    if c.shape != (n, n):
        raise ValueError(f"c has shape {c.shape}, expected {(n, n)}")
    return c * beta + alpha * (a @ a.T)


def init_syr2k(n: int, m: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return A (n x m), B (n x m) and the symmetric C (n x n)."""
    _check_sizes(n=n, m=m)
    a = _grid(n, m, lambda i, j: i * j / n)
    b = _grid(n, m, lambda i, j: (i * j + 1) / n)
    c = _grid(n, n, lambda i, j: (i * j + 2) / n)
    return a, b, c


def syr2k(a, b, c, alpha: float = SYRK_ALPHA, beta: float = SYRK_BETA) -> np.ndarray:
    """Return beta*C + alpha*(A.B^T + B.A^T)."""
    a, b, c = _matrix(a, "a"), _matrix(b, "b"), _matrix(c, "c")
    if a.shape != b.shape:
        raise ValueError(f"a and b differ in shape: {a.shape} != {b.shape}")
    n = a.shape[0]
    if c.shape != (n, n):
        raise ValueError(f"c has shape {c.shape}, expected {(n, n)}")
    return c * beta + alpha * (a @ b.T + b @ a.T)