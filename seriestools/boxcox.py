"""Box-Cox power transformation with fixed or estimated lambda.

The forward transform is ``(x**lmbda - 1) / lmbda`` for non-zero lambda
and ``ln(x)`` for lambda zero. Every finite input must be strictly
positive. NaN entries carry through unchanged.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from seriestools.lambdas import (
    NonInvertibleError,
    NonPositiveError,
    lambda_guerrero,
    lambda_mle,
    lambda_pearsonr,
)

__all__ = [
    "LambdaMethod",
    "Guerrero",
    "BoxCoxResult",
    "BoxCox",
    "box_cox",
    "inv_box_cox",
]


class LambdaMethod(enum.Enum):
    """Automatic lambda estimators that need no extra parameters."""

    MLE = "mle"
    """Gaussian maximum likelihood of the transformed series."""
    PEARSONR = "pearsonr"
    """Maximum Q-Q correlation against normal quantiles; robust to outliers."""


@dataclass(frozen=True)
class Guerrero:
    """Guerrero's variance-stabilising estimator over cycles of ``period``."""

    period: int


LambdaSpec = Union[float, LambdaMethod, Guerrero]


@dataclass(frozen=True)
class BoxCoxResult:
    """Transformed series together with the lambda that produced it."""

    transformed: list[float]
    lmbda: float


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _log(v: float) -> float:
    if math.isnan(v) or v < 0.0:
        return math.nan
    if v == 0.0:
        return -math.inf
    return math.log(v)


def _exp(v: float) -> float:
    try:
        return math.exp(v)
    except OverflowError:
        return math.inf


def _resolve_lambda(y: Sequence[float], lmbda: LambdaSpec) -> float:
    if isinstance(lmbda, LambdaMethod):
        if lmbda is LambdaMethod.MLE:
            return lambda_mle(y)
        return lambda_pearsonr(y)
    if isinstance(lmbda, Guerrero):
        return lambda_guerrero(y, lmbda.period)
    return float(lmbda)


def _apply(y: Sequence[float], lmbda: float) -> list[float]:
    finite = [v for v in y if math.isfinite(v)]
    if finite:
        lowest = min(finite)
        if not lowest > 0.0:
            raise NonPositiveError(lowest)
    if lmbda == 0.0:
        return [_log(v) for v in y]
    inv = 1.0 / lmbda
    return [(_pow(v, lmbda) - 1.0) * inv for v in y]


def inv_box_cox(y: Sequence[float], lmbda: float) -> list[float]:
    """Invert the Box-Cox transform: ``(1 + lmbda*y)**(1/lmbda)`` or ``exp(y)``.

    NaN entries carry through. Raises ``NonInvertibleError`` when a finite
    value has ``1 + lmbda*y <= 0``.
    """
    if lmbda == 0.0:
        return [_exp(v) for v in y]
    inv = 1.0 / lmbda
    out = []
    for v in y:
        if math.isnan(v):
            out.append(math.nan)
            continue
        z = 1.0 + lmbda * v
        if not math.isinf(v) and z <= 0.0:
            raise NonInvertibleError(v, lmbda)
        out.append(_pow(z, inv))
    return out


@dataclass(frozen=True)
class BoxCox:
    """A Box-Cox transformer holding its lambda.

    Build it directly from a known lambda, or with ``fit`` to estimate one
    from data, then apply the same transform to several series.
    """

    lmbda: float

    @classmethod
    def fit(cls, y: Sequence[float], lmbda: LambdaSpec) -> BoxCox:
        """Fix lambda from a number or estimate it from ``y`` with an estimator."""
        return cls(_resolve_lambda(y, lmbda))

    def transform(self, y: Sequence[float]) -> list[float]:
        """Apply the forward transform with the stored lambda."""
        return _apply(y, self.lmbda)

    def inverse_transform(self, y: Sequence[float]) -> list[float]:
        """Apply the inverse transform with the stored lambda."""
        return inv_box_cox(y, self.lmbda)


def box_cox(y: Sequence[float], lmbda: LambdaSpec) -> BoxCoxResult:
    """Box-Cox transform ``y`` with a fixed or estimated lambda.

    The result always carries the lambda used, so it can be passed to
    ``inv_box_cox`` for the back-transformation.
    """
    transformer = BoxCox.fit(y, lmbda)
    return BoxCoxResult(transformer.transform(y), transformer.lmbda)