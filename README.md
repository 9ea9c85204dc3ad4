# seriestools

Pure-Python tools for numeric series. It offers LOESS smoothing and the
Box-Cox power transform with automatic λ estimation. It has no third-party
dependencies. Inputs are plain sequences of floats, and outputs are lists.

## Installation

```
pip install .
```

## LOESS smoothing

```python
from seriestools.loess import loess, loess_at

smoothed = loess(values, span=0.3, degree=1)       # degree 0, 1 or 2
point = loess_at(values, 12.5, span=0.3, degree=2)  # fractional or out-of-range position
```

`span` is the fraction of points used in each local fit, with 0 < span ≤ 1.
Each point in the window is weighted with the tricube kernel. The smoothed
value is the intercept of a weighted local polynomial. Bad arguments raise a
subclass of `LoessError`, which is itself a `ValueError`:

- `InvalidSpanError` when the span is outside (0, 1]
- `InvalidDegreeError` when the degree is not 0, 1 or 2
- `EmptyInputError` when the series is empty
- `NonFiniteError` when the series holds NaN or infinite values

The module also exposes lower-level pieces:

- `loess_compute(y, window, degree, jump=1, weights=None)` takes an integer
  window directly. With `jump > 1` it fits at every `jump`-th index and at the
  last index, and interpolates linearly in between. It can multiply per-point
  `weights` into the kernel.
- `local_poly_fit(y, xq, k, degree, weights=None)` does a single local fit
  using the `k` nearest indices.
- `loess_window(n, xq, k)` returns the half-open index window around `xq`.
- `gauss_solve(mat, rhs)` is a small Gaussian-elimination solver. It returns
  `None` for a singular matrix.

### Several columns at once

```python
from seriestools.loess_batch import loess_batch

smoothed_columns = loess_batch([col_a, col_b], span=0.3, degree=1)
```

The kernel weights for each position are computed once and shared by every
column. All columns must have the same length; otherwise a `LoessError` is
raised. Degree 2 smooths each column on its own with `loess`.

## Box-Cox

```python
from seriestools.boxcox import BoxCox, Guerrero, LambdaMethod, box_cox, inv_box_cox

result = box_cox(values, 0.5)                  # fixed λ
result = box_cox(values, LambdaMethod.MLE)     # maximum likelihood
result = box_cox(values, LambdaMethod.PEARSONR)
original = inv_box_cox(result.transformed, result.lmbda)

bc = BoxCox.fit(train, Guerrero(period=12))    # estimate once, reuse
z = bc.transform(test)
back = bc.inverse_transform(z)
```

`box_cox` returns a `BoxCoxResult`. It has `transformed` and `lmbda`, the λ
that was applied. For a fixed λ, `lmbda` repeats the value you passed. Every
finite input must be strictly positive. NaN values pass through unchanged.

The estimators live in `seriestools.lambdas`:

- `lambda_mle(y)` uses Gaussian maximum likelihood and searches λ in [-2, 2].
- `lambda_pearsonr(y)` maximises the Q-Q correlation with normal quantiles.
  It searches λ in [-2, 2] and needs at least 4 finite values.
- `lambda_guerrero(y, period)` uses Guerrero's variance-stabilising criterion
  over whole cycles. It searches λ in [-1, 2] and needs at least two cycles.

The same module provides `inv_phi` and `golden_section_minimize`. `inv_phi`
is an approximation of the inverse standard-normal CDF. `golden_section_minimize`
is the search used by all three estimators.

Errors are subclasses of `BoxCoxError`, which is a `ValueError`:

- `NonPositiveError` when an input is not strictly positive
- `NonInvertibleError` when `inv_box_cox` meets a value with `1 + λ·y ≤ 0`
- `TooFewObservationsError` when there is too little data for an estimator
- `InvalidPeriodError` when the Guerrero period is below 2

## What it does not do

- It provides no command-line tool. It is a library only.
- It has no helpers for centring, standardising or min-max scaling a series.
- LOESS runs a single pass, with no robustness iterations.

## Running the tests

```
pip install .[test]
pytest
```