"""Locally estimated scatterplot smoothing (LOESS) on evenly spaced series.

For each output position the ``k`` nearest indices are weighted with the
tricube kernel ``(1 - |d|^3)^3`` of their distance to the query point. The
distance is normalised by the furthest point in the window. A weighted
polynomial of the requested degree is then fitted, and its intercept is
the smoothed value. This is the single-pass (non-robust) form.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = [
    "LoessError",
    "InvalidSpanError",
    "InvalidDegreeError",
    "EmptyInputError",
    "NonFiniteError",
    "loess",
    "loess_at",
    "loess_window",
    "gauss_solve",
    "local_poly_fit",
    "loess_compute",
]


class LoessError(ValueError):
    """Base class for LOESS input errors."""


class InvalidSpanError(LoessError):
    """The span is not in the half-open interval (0, 1]."""

    def __init__(self, span: float) -> None:
        super().__init__(f"span must be in (0, 1], got {span}")
        self.span = span


class InvalidDegreeError(LoessError):
    """The polynomial degree is not 0, 1 or 2."""

    def __init__(self, degree: int) -> None:
        super().__init__(f"degree must be 0, 1 or 2, got {degree}")
        self.degree = degree


class EmptyInputError(LoessError):
    """The input series is empty."""

    def __init__(self) -> None:
        super().__init__("input series is empty")


class NonFiniteError(LoessError):
    """The input series holds NaN or infinite values."""

    def __init__(self) -> None:
        super().__init__("input series contains non-finite values")


def _validate(y: Sequence[float], span: float, degree: int) -> None:
    if not (0.0 < span <= 1.0):
        raise InvalidSpanError(span)
    if degree not in (0, 1, 2):
        raise InvalidDegreeError(degree)
    if len(y) == 0:
        raise EmptyInputError()
    if not all(math.isfinite(v) for v in y):
        raise NonFiniteError()


def _window_size(n: int, span: float, degree: int) -> int:
    return min(max(math.ceil(span * n), degree + 2), n)


def loess(y: Sequence[float], span: float, degree: int) -> list[float]:
    """Smooth ``y`` at every integer position.

    ``span`` is the fraction of points used in each local fit
    (0 < span <= 1); ``degree`` is the local polynomial degree (0, 1 or 2).
    """
    _validate(y, span, degree)
    values = list(y)
    return loess_compute(values, _window_size(len(values), span, degree), degree)


def loess_at(y: Sequence[float], xq: float, span: float, degree: int) -> float:
    """Fitted LOESS value at a single, possibly fractional, position ``xq``.

    ``xq`` may lie outside ``[0, n - 1]``; the window then snaps to the
    nearest boundary slice, extrapolating the boundary fit.
    """
    _validate(y, span, degree)
    values = list(y)
    return local_poly_fit(values, xq, _window_size(len(values), span, degree), degree)


def loess_window(n: int, xq: float, k: int) -> tuple[int, int]:
    """Half-open index range of ``k`` points (clipped to ``n``) around ``xq``."""
    if k >= n:
        return 0, n
    half = k // 2
    xq_clamped = min(max(xq, 0.0), float(n - 1))
    lo = min(int(max(math.floor(xq_clamped - half), 0.0)), n - k)
    return lo, lo + k


def gauss_solve(
    mat: Sequence[Sequence[float]], rhs: Sequence[float]
) -> list[float] | None:
    """Solve ``mat @ x = rhs`` by Gaussian elimination with partial pivoting.

    Returns ``None`` when the matrix is (numerically) singular.
    """
    a = [list(row) for row in mat]
    b = list(rhs)
    n = len(b)
    for i in range(n):
        pivot = max(range(i, n), key=lambda r: abs(a[r][i]))
        if abs(a[pivot][i]) < 1e-12:
            return None
        if pivot != i:
            a[i], a[pivot] = a[pivot], a[i]
            b[i], b[pivot] = b[pivot], b[i]
        row_i = a[i]
        for j in range(i + 1, n):
            row_j = a[j]
            factor = row_j[i] / row_i[i]
            b[j] -= factor * b[i]
            for c in range(i, n):
                row_j[c] -= factor * row_i[c]
    x = [0.0] * n
    for i in reversed(range(n)):
        s = b[i] - sum(a[i][j] * x[j] for j in range(i + 1, n))
        x[i] = s / a[i][i]
    return x


def _nearest_index(xq: float, n: int) -> int:
    rounded = math.floor(xq + 0.5) if xq >= 0 else math.ceil(xq - 0.5)
    return int(min(max(rounded, 0), n - 1))


def local_poly_fit(
    y: Sequence[float],
    xq: float,
    k: int,
    degree: int,
    weights: Sequence[float] | None = None,
) -> float:
    """Local polynomial fit at ``xq`` using the ``k`` closest indices.

    Optional per-point ``weights`` are multiplied into the tricube
    distance weights. Falls back to a weighted mean when the normal
    equations are singular. Returns NaN for an empty series.
    """
    n = len(y)
    if n == 0:
        return math.nan
    lo, hi = loess_window(n, xq, k)
    max_dist = max(abs(xq - lo), abs((hi - 1) - xq), 1.0) + 1.0

    def kernel(i: int) -> float:
        d = abs(i - xq) / max_dist
        if d >= 1.0:
            w = 0.0
        else:
            u = 1.0 - d * d * d
            w = u * u * u
        return w * weights[i] if weights is not None else w

    window = [(i, kernel(i)) for i in range(lo, hi)]

    def weighted_mean() -> float:
        wsum = sum(w for _, w in window)
        if wsum > 0.0:
            return sum(w * y[i] for i, w in window) / wsum
        return y[_nearest_index(xq, n)]

    if degree == 0:
        return weighted_mean()

    m = degree + 1
    xtwx = [[0.0] * m for _ in range(m)]
    xtwy = [0.0] * m
    wsum = 0.0
    for i, w in window:
        if w == 0.0:
            continue
        wsum += w
        dx = i - xq
        powers = [1.0]
        for _ in range(2 * m - 2):
            powers.append(powers[-1] * dx)
        yi = y[i]
        for r, row in enumerate(xtwx):
            xtwy[r] += w * powers[r] * yi
            for c in range(m):
                row[c] += w * powers[r + c]

    if wsum == 0.0:
        return y[_nearest_index(xq, n)]

    coefs = gauss_solve(xtwx, xtwy)
    return coefs[0] if coefs is not None else weighted_mean()


def _jump_indices(n: int, jump: int) -> list[int]:
    indices = list(range(0, n, jump))
    if indices[-1] != n - 1:
        indices.append(n - 1)
    return indices


def _interpolate_between(
    fit_at: list[int], fit_vals: list[float], n: int
) -> list[float]:
    out = [0.0] * n
    for (i0, y0), (i1, y1) in zip(zip(fit_at, fit_vals), zip(fit_at[1:], fit_vals[1:])):
        out[i0] = y0
        width = i1 - i0
        for i in range(i0 + 1, i1):
            alpha = (i - i0) / width
            out[i] = y0 + alpha * (y1 - y0)
    out[fit_at[-1]] = fit_vals[-1]
    return out


def loess_compute(
    y: Sequence[float],
    window: int,
    degree: int,
    jump: int = 1,
    weights: Sequence[float] | None = None,
) -> list[float]:
    """LOESS with an integer window, an optional jump and optional weights.

    With ``jump > 1`` the fit is evaluated at every ``jump``-th index
    (and always at the last one) and linearly interpolated in between.
    """
    n = len(y)
    if n == 0:
        return []
    k = min(max(window, degree + 2), n)
    jump = max(jump, 1)
    if jump == 1:
        return [local_poly_fit(y, float(i), k, degree, weights) for i in range(n)]
    fit_at = _jump_indices(n, jump)
    fit_vals = [local_poly_fit(y, float(i), k, degree, weights) for i in fit_at]
    return _interpolate_between(fit_at, fit_vals, n)