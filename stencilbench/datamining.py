"""Data-mining kernels: correlation and covariance matrices."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from stencilbench.util import DATA_TYPE

CORRELATION_FLOAT_N = 3214212.01
COVARIANCE_FLOAT_N = 3214212.01
EPS = 0.005


class CorrelationResult(NamedTuple):
    """Outputs of :func:`correlation`."""

    mean: np.ndarray
    stddev: np.ndarray
    symmat: np.ndarray
    normalized: np.ndarray


class CovarianceResult(NamedTuple):
    """Outputs of :func:`covariance`."""

    mean: np.ndarray
    symmat: np.ndarray
    centered: np.ndarray


def _check_sizes(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _data_matrix(data) -> np.ndarray:
    arr = np.array(data, dtype=DATA_TYPE, copy=True)
    if arr.ndim != 2:
        raise ValueError(f"data must be two-dimensional, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"data must not be empty, got shape {arr.shape}")
    return arr


def _grid(rows: int, cols: int, divisor: float) -> np.ndarray:
    i = np.arange(rows, dtype=DATA_TYPE)[:, None]
    j = np.arange(cols, dtype=DATA_TYPE)[None, :]
    return np.ascontiguousarray(i * j / divisor, dtype=DATA_TYPE)


def init_correlation_data(m: int, n: int) -> np.ndarray:
    """Return n observations of m variables, with data[i, j] = i*j/(m+1)."""
    _check_sizes(m=m, n=n)
    return _grid(n, m, m + 1)


def correlation(data) -> CorrelationResult:
    """Compute the m x m correlation matrix of the columns of ``data``.

    Means and deviations are scaled by the fixed sample count
    ``CORRELATION_FLOAT_N``; a deviation at or below ``EPS`` is taken as 1.
    The input is left untouched; the normalized copy is returned.
    """
    arr = _data_matrix(data)
    mean = (arr.sum(axis=0, dtype=DATA_TYPE) / DATA_TYPE(CORRELATION_FLOAT_N)).astype(DATA_TYPE)
    deviation = arr - mean
    variance = (deviation * deviation).sum(axis=0, dtype=DATA_TYPE) / DATA_TYPE(CORRELATION_FLOAT_N)
    stddev = np.sqrt(variance).astype(DATA_TYPE)
    stddev = np.where(stddev <= EPS, DATA_TYPE(1.0), stddev).astype(DATA_TYPE)

    normalized = ((arr - mean) / (DATA_TYPE(math.sqrt(CORRELATION_FLOAT_N)) * stddev)).astype(DATA_TYPE)
    symmat = (normalized.T @ normalized).astype(DATA_TYPE)
    np.fill_diagonal(symmat, 1.0)
    return CorrelationResult(mean=mean, stddev=stddev, symmat=symmat, normalized=normalized)


def init_covariance_data(m: int, n: int) -> np.ndarray:
    """Return n observations of m variables, with data[i, j] = i*j/m."""
    _check_sizes(m=m, n=n)
    return _grid(n, m, m)


def covariance(data) -> CovarianceResult:
    """Compute the m x m covariance matrix of the columns of ``data``.

    Means are scaled by the fixed sample count ``COVARIANCE_FLOAT_N``, and the
    products are summed over every observation but the first.
    The input is left untouched; the centered copy is returned.
    """
    arr = _data_matrix(data)
    mean = (arr.astype(np.float64).sum(axis=0) / COVARIANCE_FLOAT_N).astype(DATA_TYPE)
    centered = (arr - mean).astype(DATA_TYPE)
    tail = centered[1:]
    symmat = (tail.T @ tail).astype(DATA_TYPE)
    return CovarianceResult(mean=mean, symmat=symmat, centered=centered)