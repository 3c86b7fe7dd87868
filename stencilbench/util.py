"""Shared helpers: dataset sizes, result comparison and timing."""

from __future__ import annotations

import enum
import math
import time
from dataclasses import dataclass, fields
from typing import Any, Callable, TypeVar

import numpy as np

SMALL_FLOAT_VAL = 0.00000001
DATA_TYPE = np.float32

T = TypeVar("T")


class Dataset(enum.Enum):
    """Named problem-size presets."""

    MINI = "mini"
    SMALL = "small"
    STANDARD = "standard"
    LARGE = "large"
    EXTRALARGE = "extralarge"

    @classmethod
    def parse(cls, value: "Dataset | str") -> "Dataset":
        """Accept a member, a name such as ``"mini"`` or ``"MINI_DATASET"``."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"dataset must be a Dataset or a string, not {type(value).__name__}")
        key = value.strip().lower()
        if key.endswith("_dataset"):
            key = key[: -len("_dataset")]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown dataset: {value!r}") from None


@dataclass(frozen=True)
class DatasetSizes:
    """Every size parameter a preset defines."""

    x: int
    y: int
    z: int
    n: int
    m: int
    ni: int
    nj: int
    nk: int
    nl: int
    nm: int
    nq: int
    nr: int
    np: int
    nx: int
    ny: int
    cz: int
    cym: int
    cxm: int
    large_n: int
    length: int
    tsteps: int
    iter: int
    maxgrid: int


def _sizes(*values: int) -> DatasetSizes:
    names = [f.name for f in fields(DatasetSizes)]
    return DatasetSizes(**dict(zip(names, values, strict=True)))


_SIZES = {
    Dataset.MINI: _sizes(
        32, 32, 32, 32, 32, 32, 32, 32, 32, 32, 10, 10, 10,
        32, 32, 32, 32, 32, 500, 32, 2, 10, 2,
    ),
    Dataset.SMALL: _sizes(
        64, 64, 64, 256, 256, 128, 128, 128, 128, 128, 32, 32, 32,
        500, 500, 64, 64, 64, 1000, 50, 10, 10, 8,
    ),
    Dataset.STANDARD: _sizes(
        128, 128, 128, 1024, 1024, 1024, 1024, 1024, 1024, 1024, 128, 128, 128,
        4000, 4000, 256, 256, 256, 10000, 50, 10, 10, 32,
    ),
    Dataset.LARGE: _sizes(
        256, 256, 256, 2048, 2048, 2048, 2048, 2048, 2048, 2048, 256, 256, 256,
        4096, 4096, 512, 512, 512, 2048 * 2048, 500, 10, 100, 128,
    ),
    Dataset.EXTRALARGE: _sizes(
        512, 512, 512, 4000, 4000, 4000, 4000, 4000, 4000, 4000, 1000, 1000, 1000,
        100000, 100000, 1000, 1000, 1000, 10000000, 500, 10, 1000, 512,
    ),
}


def dataset_sizes(dataset: Dataset | str = Dataset.STANDARD) -> DatasetSizes:
    """Return the sizes of a preset; the standard preset is the default."""
    return _SIZES[Dataset.parse(dataset)]


def abs_val(a: float) -> float:
    """Absolute value."""
    return -a if a < 0 else a


def percent_diff(val1: float, val2: float) -> float:
    """Relative difference in percent; values both near zero count as equal."""
    if abs_val(val1) < 0.01 and abs_val(val2) < 0.01:
        return 0.0
    denominator = abs_val(val1 + SMALL_FLOAT_VAL)
    if denominator == 0:
        return math.inf
    return 100.0 * abs_val(abs_val(val1 - val2) / denominator)


def count_mismatches(expected: Any, actual: Any, threshold: float) -> int:
    """Count elements whose percent difference exceeds ``threshold``."""
    exp = np.asarray(expected, dtype=np.float64)
    act = np.asarray(actual, dtype=np.float64)
    if exp.shape != act.shape:
        raise ValueError(f"shape mismatch: {exp.shape} != {act.shape}")
    near_zero = (np.abs(exp) < 0.01) & (np.abs(act) < 0.01)
    with np.errstate(divide="ignore", invalid="ignore"):
        diff = 100.0 * np.abs(np.abs(exp - act) / np.abs(exp + SMALL_FLOAT_VAL))
    diff = np.where(near_zero, 0.0, diff)
    return int(np.count_nonzero(diff > threshold))


def rtclock() -> float:
    """Wall-clock time in seconds."""
    return time.time()


def timed(func: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, float]:
    """Call ``func`` and return its result with the elapsed seconds."""
    start = time.perf_counter()
    result = func(*args, **kwargs)
    return result, time.perf_counter() - start