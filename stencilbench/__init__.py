"""NumPy reference kernels for linear-algebra, data-mining and stencil benchmarks."""

__version__ = "0.1.0"