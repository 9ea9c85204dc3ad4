"""Estimators for the Box-Cox power parameter and their shared errors.

Three criteria are offered. Maximum likelihood uses a Gaussian model of
the transformed series. The Pearson estimator maximises the Q-Q
correlation against normal quantiles. Guerrero's estimator stabilises the
variance across seasonal blocks. Each criterion is minimised by a
golden-section search over a fixed bracket.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

__all__ = [
    "BoxCoxError",
    "NonPositiveError",
    "NonInvertibleError",
    "TooFewObservationsError",
    "InvalidPeriodError",
    "inv_phi",
    "golden_section_minimize",
    "lambda_mle",
    "lambda_pearsonr",
    "lambda_guerrero",
]


class BoxCoxError(ValueError):
    """Base class for Box-Cox errors."""


class NonPositiveError(BoxCoxError):
    """A finite input value is not strictly positive."""

    def __init__(self, min: float) -> None:
        super().__init__(f"Box-Cox requires strictly positive values, got minimum {min}")
        self.min = min


class NonInvertibleError(BoxCoxError):
    """A transformed value lies outside the range of the forward transform."""

    def __init__(self, value: float, lmbda: float) -> None:
        super().__init__(
            f"value {value} cannot be inverted with lambda {lmbda}: 1 + lambda * value <= 0"
        )
        self.value = value
        self.lmbda = lmbda


class TooFewObservationsError(BoxCoxError):
    """Too few usable observations to estimate lambda."""

    def __init__(self, n: int, min: int) -> None:
        super().__init__(f"need at least {min} observations to estimate lambda, got {n}")
        self.n = n
        self.min = min


class InvalidPeriodError(BoxCoxError):
    """The seasonal period is smaller than two."""

    def __init__(self, period: int) -> None:
        super().__init__(f"period must be at least 2, got {period}")
        self.period = period


_RESPHI = 0.3819660112501052  # (3 - sqrt(5)) / 2

_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)


def _pow(base: float, exponent: float) -> float:
    """IEEE-style power: NaN for undefined results, infinity on overflow."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _transform(v: float, lmbda: float) -> float:
    if lmbda == 0.0:
        return math.log(v)
    return (_pow(v, lmbda) - 1.0) / lmbda


def _check_positive(values: Sequence[float]) -> int:
    """Raise if the smallest finite value is not positive; return the finite count."""
    finite = [v for v in values if math.isfinite(v)]
    if finite:
        lowest = min(finite)
        if not lowest > 0.0:
            raise NonPositiveError(lowest)
    return len(finite)


def inv_phi(p: float) -> float:
    """Inverse standard-normal CDF (Acklam's rational approximation)."""
    p_low = 0.02425
    p_high = 1.0 - p_low
    if p < p_low:
        q = math.sqrt(-2.0 * math.log(p))
        return (((((_C[0] * q + _C[1]) * q + _C[2]) * q + _C[3]) * q + _C[4]) * q + _C[5]) / (
            (((_D[0] * q + _D[1]) * q + _D[2]) * q + _D[3]) * q + 1.0
        )
    if p <= p_high:
        q = p - 0.5
        r = q * q
        return (
            (((((_A[0] * r + _A[1]) * r + _A[2]) * r + _A[3]) * r + _A[4]) * r + _A[5]) * q
        ) / (((((_B[0] * r + _B[1]) * r + _B[2]) * r + _B[3]) * r + _B[4]) * r + 1.0)
    q = math.sqrt(-2.0 * math.log(1.0 - p))
    return -(((((_C[0] * q + _C[1]) * q + _C[2]) * q + _C[3]) * q + _C[4]) * q + _C[5]) / (
        (((_D[0] * q + _D[1]) * q + _D[2]) * q + _D[3]) * q + 1.0
    )


def golden_section_minimize(
    f: Callable[[float], float],
    a: float,
    b: float,
    tol: float = 1e-8,
    max_iter: int = 200,
) -> float:
    """Locate the minimum of a unimodal ``f`` on ``[a, b]`` by golden-section search."""
    x1 = a + _RESPHI * (b - a)
    x2 = b - _RESPHI * (b - a)
    f1 = f(x1)
    f2 = f(x2)
    for _ in range(max_iter):
        if abs(b - a) < tol:
            break
        if f1 < f2:
            b, x2, f2 = x2, x1, f1
            x1 = a + _RESPHI * (b - a)
            f1 = f(x1)
        else:
            a, x1, f1 = x1, x2, f2
            x2 = b - _RESPHI * (b - a)
            f2 = f(x2)
    return x1 if f1 < f2 else x2


def lambda_mle(y: Sequence[float]) -> float:
    """Maximum-likelihood lambda under a Gaussian model of the transformed series."""
    n_finite = _check_positive(y)
    if n_finite < 2:
        raise TooFewObservationsError(n_finite, 2)
    finite = [v for v in y if math.isfinite(v)]
    log_sum = sum(math.log(v) for v in finite)
    nf = float(n_finite)

    def neg_loglik(lmbda: float) -> float:
        total = 0.0
        total_sq = 0.0
        for v in finite:
            t = _transform(v, lmbda)
            total += t
            total_sq += t * t
        mean = total / nf
        var = total_sq / nf - mean * mean
        if var <= 0.0:
            return math.inf
        return 0.5 * nf * math.log(var) - (lmbda - 1.0) * log_sum

    return golden_section_minimize(neg_loglik, -2.0, 2.0, 1e-8, 200)


def lambda_pearsonr(y: Sequence[float]) -> float:
    """Lambda maximising the correlation of sorted transformed values with normal quantiles."""
    n = _check_positive(y)
    if n < 4:
        raise TooFewObservationsError(n, 4)
    finite = [v for v in y if math.isfinite(v)]
    quantiles = [inv_phi((i - 0.375) / (n + 0.25)) for i in range(1, n + 1)]
    q_mean = sum(quantiles) / n
    q_centered = [q - q_mean for q in quantiles]
    q_ss_sqrt = math.sqrt(sum(q * q for q in q_centered))
    if q_ss_sqrt <= 0.0:
        raise TooFewObservationsError(n, 4)

    def neg_corr(lmbda: float) -> float:
        z = []
        for v in finite:
            t = _transform(v, lmbda)
            if not math.isfinite(t):
                return math.inf
            z.append(t)
        z.sort()
        z_mean = sum(z) / n
        num = 0.0
        z_ss = 0.0
        for zi, qc in zip(z, q_centered):
            zc = zi - z_mean
            num += zc * qc
            z_ss += zc * zc
        z_ss_sqrt = math.sqrt(z_ss)
        if z_ss_sqrt <= 0.0:
            return math.inf
        return -(num / (z_ss_sqrt * q_ss_sqrt))

    return golden_section_minimize(neg_corr, -2.0, 2.0, 1e-8, 200)


def lambda_guerrero(y: Sequence[float], period: int) -> float:
    """Guerrero's variance-stabilising lambda over blocks of length ``period``."""
    if period < 2:
        raise InvalidPeriodError(period)
    values = list(y)
    n_blocks = len(values) // period
    if n_blocks < 2:
        raise TooFewObservationsError(len(values), 2 * period)
    _check_positive(values[: n_blocks * period])

    means = []
    sds = []
    for b in range(n_blocks):
        block = values[b * period : (b + 1) * period]
        mean = sum(block) / period
        var = sum((v - mean) ** 2 for v in block) / (period - 1)
        means.append(mean)
        sds.append(math.sqrt(var) if var >= 0.0 else math.nan)

    def criterion(lmbda: float) -> float:
        ratios = []
        for mean, sd in zip(means, sds):
            denom = _pow(mean, 1.0 - lmbda)
            if not math.isfinite(denom) or denom <= 0.0:
                return math.inf
            ratios.append(sd / denom)
        mean_r = sum(ratios) / n_blocks
        if mean_r == 0.0:
            return math.inf
        var_r = sum((r - mean_r) ** 2 for r in ratios) / (n_blocks - 1)
        return math.sqrt(var_r) / abs(mean_r)

    return golden_section_minimize(criterion, -1.0, 2.0, 1e-8, 200)