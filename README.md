# stencilbench

Reference CPU implementations of classic benchmark kernels (dense linear
algebra, data mining and iterative stencils), written with NumPy. Each
kernel comes with an initialiser that fills its inputs with the
benchmark's deterministic patterns, so results can be compared against
other implementations of the same kernel with `count_mismatches`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `stencilbench.util`
  - `Dataset`: the presets `MINI`, `SMALL`, `STANDARD`, `LARGE` and
    `EXTRALARGE`. `Dataset.parse` accepts a member or a name such as
    `"mini"` or `"MINI_DATASET"`.
  - `DatasetSizes` and `dataset_sizes(dataset)`: every size parameter of
    a preset (standard by default).
  - `abs_val`, `percent_diff(val1, val2)` (values both below 0.01 in
    magnitude count as equal) and `count_mismatches(expected, actual,
    threshold)`, which counts elements whose percent difference exceeds
    the threshold.
  - `rtclock()` (wall-clock seconds) and `timed(func, *args, **kwargs)`,
    which returns `(result, elapsed_seconds)`.
- `stencilbench.matmul`: `init_2mm`/`mm2`, `mm3_sizes`/`init_3mm`/`mm3`,
  `init_gemm`/`gemm`, `init_syrk`/`syrk`, `init_syr2k`/`syr2k`.
  `mm3_sizes` knows the presets mini, small, medium, large (the default)
  and extralarge.
- `stencilbench.matvec`: `init_atax`/`atax`, `init_bicg`/`bicg`,
  `init_gesummv`/`gesummv`, `init_mvt`/`mvt`.
- `stencilbench.datamining`: `init_correlation_data`/`correlation` and
  `init_covariance_data`/`covariance`. Both scale by a fixed sample count;
  covariance sums its products over every observation but the first.
- `stencilbench.convolution`: `conv2d_sizes`/`init_conv2d`/`conv2d`
  (3x3 filter, seeded random input) and `conv3d_sizes`/`init_conv3d`/`conv3d`
  (3x3x3 filter). Borders of the output stay zero.
- `stencilbench.fdtd_apml`: `apml_sizes`, `init_fdtd_apml`, which builds an
  `ApmlState`, and `fdtd_apml(state)`, which runs one sweep and updates the
  state in place.
- `stencilbench.stencils2d`: `problem_sizes(benchmark, dataset)` for
  jacobi-1d, jacobi-2d, seidel-2d, adi and fdtd-2d, and the kernels
  `jacobi1d`, `jacobi2d`, `seidel2d`, `adi` and `fdtd2d` with their `init_*`
  functions. `jacobi2d` counts its time steps from 10, so it runs
  `tsteps - 10` sweeps.
- `stencilbench.jacobi3d`: the domain initialisers `init_ones` and
  `init_gradient` (a zero halo around the interior), the general
  `star_stencil(a, tsteps, radius, coefficients)`, the kernels `jacobi3d`,
  `jacobi3d7pt` and `jacobi3d13pt`, and `check_result(a, ref)`, which
  returns whether two grids are exactly equal and prints the first
  difference.
- `stencilbench.jacobi3d_wide`: `jacobi3d19pt`, `jacobi3d25pt` and
  `jacobi3d31pt` (radius three, four and five).

Apart from `fdtd_apml`, the kernels do not modify the arrays passed to
them; they return new arrays.

## Example

```python
from stencilbench.util import Dataset, dataset_sizes, timed, count_mismatches
from stencilbench.matmul import init_gemm, gemm

sizes = dataset_sizes(Dataset.MINI)
a, b, c = init_gemm(sizes.ni, sizes.nj, sizes.nk)

result, seconds = timed(gemm, a, b, c, 32412.0, 2123.0)
print(f"CPU Runtime: {seconds:0.6f}s")

reference = (a @ b) * 32412.0 + c * 2123.0
print("mismatches:", count_mismatches(reference, result, 0.05))
```

## What the package does not do

It is a library only: there is no command-line runner that executes a
benchmark and prints its timing, and there are no accelerator (GPU)
versions of the kernels. To compare against such results, produce them
elsewhere and pass them to `count_mismatches` or `check_result`.