"""LOESS over several equally long columns at once.

The tricube kernel for each output position is built once and applied to
every column. Degrees 0 and 1 use the closed-form weighted fit; degree 2
falls back to the per-column smoother.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from seriestools.loess import (
    EmptyInputError,
    InvalidDegreeError,
    InvalidSpanError,
    LoessError,
    NonFiniteError,
    loess,
)

__all__ = ["loess_batch"]


@dataclass(frozen=True)
class _PointKernel:
    """Weights of one output position, shared by every column."""

    index: int
    terms: tuple[tuple[int, float, float], ...]  # (source index, dx, weight)
    wsum: float
    swdx: float
    det: float
    swdx2: float
    linear: bool

    def apply(self, col: Sequence[float]) -> float:
        if self.wsum == 0.0:
            return col[self.index]
        wy = sum(w * col[k] for k, _, w in self.terms)
        if not self.linear:
            return wy / self.wsum
        swdxy = sum((w * dx) * col[k] for k, dx, w in self.terms)
        return (self.swdx2 * wy - self.swdx * swdxy) / self.det


def _point_kernel(i: int, n: int, window: int, degree: int) -> _PointKernel:
    half = window // 2
    lo = min(max(i - half, 0), n - window)
    hi = min(lo + window, n)
    max_dist = max(abs(i - lo), abs((hi - 1) - i), 1.0) + 1.0

    terms = []
    for k in range(lo, hi):
        dx = float(k - i)
        d = abs(dx) / max_dist
        if d >= 1.0:
            continue
        u = 1.0 - d * d * d
        w = u * u * u
        if w != 0.0:
            terms.append((k, dx, w))

    wsum = sum(w for _, _, w in terms)
    swdx = sum(w * dx for _, dx, w in terms)
    swdx2 = sum(w * dx * dx for _, dx, w in terms)
    det = wsum * swdx2 - swdx * swdx
    linear = degree >= 1 and abs(det) >= 1e-12
    return _PointKernel(i, tuple(terms), wsum, swdx, det, swdx2, linear)


def loess_batch(
    columns: Iterable[Sequence[float]], span: float, degree: int
) -> list[list[float]]:
    """Smooth every column with LOESS; returns one smoothed list per column."""
    cols = [list(c) for c in columns]
    if degree not in (0, 1):
        if degree > 1:
            return [loess(c, span, degree) for c in cols]
        raise InvalidDegreeError(degree)
    if not cols:
        return []
    n = len(cols[0])
    if n == 0:
        raise EmptyInputError()
    if not (0.0 < span <= 1.0):
        raise InvalidSpanError(span)
    for c in cols:
        if len(c) != n:
            raise LoessError("all columns must have the same length")
        if not all(math.isfinite(v) for v in c):
            raise NonFiniteError()

    window = min(max(math.ceil(span * n), degree + 2), n)
    kernels = [_point_kernel(i, n, window, degree) for i in range(n)]
    return [[kern.apply(c) for kern in kernels] for c in cols]