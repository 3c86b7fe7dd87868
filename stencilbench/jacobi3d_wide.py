"""Three-dimensional Jacobi star stencils of radius three, four and five."""

from __future__ import annotations

import numpy as np

from stencilbench.jacobi3d import STAR_COEFFICIENTS, star_stencil


def jacobi3d19pt(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Nineteen-point stencil of radius three with the star weights."""
    return star_stencil(a, tsteps, 3, STAR_COEFFICIENTS)


def jacobi3d25pt(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Twenty-five-point stencil of radius four with the star weights."""
    return star_stencil(a, tsteps, 4, STAR_COEFFICIENTS)


def jacobi3d31pt(a, tsteps: int) -> tuple[np.ndarray, np.ndarray]:
    """Thirty-one-point stencil of radius five with the star weights."""
    return star_stencil(a, tsteps, 5, STAR_COEFFICIENTS)