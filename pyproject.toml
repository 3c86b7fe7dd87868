[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stencilbench"
version = "0.1.0"
description = "Reference NumPy kernels for linear-algebra, data-mining and stencil benchmarks"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["benchmark", "stencil", "jacobi", "linear-algebra", "fdtd", "numpy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stencilbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
