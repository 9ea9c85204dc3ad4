import math

import pytest

from seriestools.boxcox import (
    BoxCox,
    BoxCoxResult,
    Guerrero,
    LambdaMethod,
    box_cox,
    inv_box_cox,
)
from seriestools.lambdas import (
    InvalidPeriodError,
    NonInvertibleError,
    NonPositiveError,
)


def _normal_like():
    out = []
    for i in range(200):
        t = i * 0.31
        out.append(10.0 + math.sin(t) + math.cos(t * 1.7) * 0.5 + math.sin(t * 0.3) * 0.3)
    return out


def _lognormal_like():
    out = []
    for i in range(200):
        t = i * 0.31
        out.append(math.exp(math.sin(t) + math.cos(t * 1.7) * 0.5) * 10.0)
    return out


def test_lambda_zero_is_log():
    out = box_cox([1.0, math.e], 0.0)
    assert out.lmbda == 0.0
    assert out.transformed[0] == pytest.approx(0.0, abs=1e-12)
    assert out.transformed[1] == pytest.approx(1.0, rel=1e-12)


def test_lambda_two():
    out = box_cox([1.0, 2.0, 3.0], 2.0)
    assert out.transformed[0] == pytest.approx(0.0, abs=1e-12)
    assert out.transformed[1] == pytest.approx(1.5)
    assert out.transformed[2] == pytest.approx(4.0)


def test_rejects_non_positive():
    with pytest.raises(NonPositiveError) as info:
        box_cox([1.0, 0.0, 2.0], 1.0)
    assert info.value.min == 0.0


def test_propagates_nan():
    out = box_cox([1.0, math.nan, 4.0], 2.0)
    assert out.transformed[0] == 0.0
    assert math.isnan(out.transformed[1])
    assert out.transformed[2] == pytest.approx(7.5)


def test_echoes_fixed_lambda():
    out = box_cox([1.0, 2.0, 4.0], 0.75)
    assert isinstance(out, BoxCoxResult)
    assert out.lmbda == 0.75


def test_inv_lambda_zero_is_exp():
    out = inv_box_cox([0.0, 1.0, 2.0], 0.0)
    assert out[0] == pytest.approx(1.0, rel=1e-12)
    assert out[1] == pytest.approx(math.e, rel=1e-12)
    assert out[2] == pytest.approx(math.e * math.e, rel=1e-12)


@pytest.mark.parametrize(
    "x, lmbda",
    [
        ([1.0, 2.0, 3.5, 7.25], 2.0),
        ([1.0, 2.0, 4.0, 8.0, 16.0], 0.5),
    ],
)
def test_inverse_roundtrips(x, lmbda):
    y = box_cox(x, lmbda)
    back = inv_box_cox(y.transformed, y.lmbda)
    assert back == pytest.approx(x, rel=1e-12)


def test_inv_propagates_nan():
    out = inv_box_cox([0.0, math.nan, 1.0], 0.0)
    assert out[0] == pytest.approx(1.0, rel=1e-12)
    assert math.isnan(out[1])
    assert out[2] == pytest.approx(math.e, rel=1e-12)


def test_inv_rejects_out_of_domain():
    with pytest.raises(NonInvertibleError) as info:
        inv_box_cox([-2.0], 1.0)
    assert info.value.value == -2.0


def test_mle_near_one_on_normal_data():
    assert abs(box_cox(_normal_like(), LambdaMethod.MLE).lmbda - 1.0) < 0.5


def test_mle_near_zero_on_lognormal_data():
    assert abs(box_cox(_lognormal_like(), LambdaMethod.MLE).lmbda) < 0.5


def test_pearsonr_near_one_on_normal_data():
    assert abs(box_cox(_normal_like(), LambdaMethod.PEARSONR).lmbda - 1.0) < 0.5


def test_pearsonr_near_zero_on_lognormal_data():
    assert abs(box_cox(_lognormal_like(), LambdaMethod.PEARSONR).lmbda) < 0.5


@pytest.mark.parametrize("method", [LambdaMethod.MLE, LambdaMethod.PEARSONR])
def test_estimators_reject_non_positive(method):
    with pytest.raises(NonPositiveError):
        box_cox([1.0, -2.0, 3.0], method)


def test_pearsonr_close_to_mle_under_outlier():
    y = [10.0 + math.sin(i * 0.31) * 0.5 for i in range(200)]
    y[100] = 200.0
    mle = box_cox(y, LambdaMethod.MLE).lmbda
    pearson = box_cox(y, LambdaMethod.PEARSONR).lmbda
    assert math.isfinite(mle) and math.isfinite(pearson)
    assert abs(mle - pearson) < 1.5


def test_guerrero_rejects_invalid_period():
    with pytest.raises(InvalidPeriodError) as info:
        box_cox([1.0] * 100, Guerrero(period=1))
    assert info.value.period == 1


def test_new_stores_lambda():
    assert BoxCox(0.5).lmbda == 0.5


def test_fit_with_fixed_lambda_ignores_data():
    assert BoxCox.fit([], 0.7).lmbda == 0.7


def test_fit_runs_estimator_on_data():
    assert abs(BoxCox.fit(_lognormal_like(), LambdaMethod.MLE).lmbda) < 0.5


def test_transform_inverse_roundtrips():
    y = [1.0, 2.0, 4.0, 8.0, 16.0]
    bc = BoxCox(0.5)
    back = bc.inverse_transform(bc.transform(y))
    assert back == pytest.approx(y, rel=1e-12)


def test_transform_matches_free_function():
    y = [1.5, 2.5, 4.0, 8.5]
    assert BoxCox(0.75).transform(y) == box_cox(y, 0.75).transformed


def test_applies_to_multiple_series_with_same_lambda():
    y_train = [math.sqrt(i) * 5.0 + 10.0 for i in range(1, 51)]
    y_test = [math.sqrt(i) * 5.0 + 10.0 for i in range(51, 61)]
    bc = BoxCox.fit(y_train, LambdaMethod.MLE)
    z_train = bc.transform(y_train)
    z_test = bc.transform(y_test)
    assert len(z_train) == len(y_train)
    assert len(z_test) == len(y_test)
    assert bc.inverse_transform(z_test) == pytest.approx(y_test, rel=1e-10)


def test_guerrero_picks_log_for_multiplicative_variance():
    period = 12
    y = []
    for c in range(30):
        level = 10.0 + 0.5 * c
        for i in range(period):
            seasonal = math.sin(2.0 * math.pi * i / period)
            y.append(level * (1.0 + 0.2 * seasonal))
    assert box_cox(y, Guerrero(period=period)).lmbda < 0.5


def test_guerrero_picks_one_for_additive_variance():
    period = 12
    y = []
    for c in range(30):
        for i in range(period):
            seasonal = math.sin(2.0 * math.pi * i / period)
            y.append(10.0 + 0.5 * c + seasonal)
    assert abs(box_cox(y, Guerrero(period=period)).lmbda - 1.0) < 0.5