import math

import pytest

from bullwhip.utils import coef_var, compute_bullwhip, round_half_up, round_places


def record(tick, demand, r, w, f):
    row = {'tick': tick, 'customer_demand': demand}
    for tier, order in (("retailer", r), ("wholesaler", w), ("factory", f)):
        row[tier] = {'last_order_placed': order}
    return row


@pytest.mark.parametrize("x, expected", [(2.5, 3), (2.4999, 2), (-0.5, 0), (0.0, 0), (7, 7)])
def test_round_half_up(x, expected):
    assert round_half_up(x) == expected


def test_coef_var_population_std_over_mean():
    assert coef_var([10, 30]) == pytest.approx(10 / 20)
    assert coef_var([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2 / 5)


@pytest.mark.parametrize("series", [[], [0, 0, 0], [-5, 5]])
def test_coef_var_zero_mean_or_empty(series):
    assert coef_var(series) == 0


def test_bullwhip_defaults_with_short_history():
    history = [record(t, 20 + t, 0, 100 * t, 7) for t in range(1, 5)]
    assert compute_bullwhip(history) == {'retailer': 1, 'wholesaler': 1, 'factory': 1}
    assert compute_bullwhip([]) == {'retailer': 1.0, 'wholesaler': 1.0, 'factory': 1.0}


def test_bullwhip_ratio_of_order_to_demand_cov():
    demand = [10, 30, 10, 30, 10, 30]
    history = [record(t, d, d, 2 * d - 10, 20) for t, d in enumerate(demand, 1)]
    ratios = compute_bullwhip(history)
    assert ratios['retailer'] == 1.0
    # 2d - 10 alternates 10 / 50: cov 20/30
    assert ratios['wholesaler'] == round_places((20 / 30) / 0.5, 2)
    assert ratios['factory'] == 0.0


def test_bullwhip_flat_demand_uses_floor_divisor():
    history = [record(t, 20, 20 if t % 2 else 30, 20, 20) for t in range(1, 7)]
    ratios = compute_bullwhip(history)
    assert ratios['retailer'] == round_places(coef_var([20, 30] * 3) / 0.001, 2)
    assert ratios['wholesaler'] == 0.0
    assert not math.isinf(ratios['retailer'])


@pytest.mark.parametrize(
    "x, places, expected",
    [
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (0.25, 1, 0.3),
        (0.375, 2, 0.38),
        # 2.675 is stored just below the tie
        (2.675, 2, 2.67),
        (1.2345, 1, 1.2),
        (3.0, 2, 3.0),
    ],
)
def test_round_places_ties_away_from_zero(x, places, expected):
    assert round_places(x, places) == expected


def test_bullwhip_ratio_tie_rounds_up():
    # demand cov 0.5, wholesaler cov 0.0625: ratio 0.125 exactly
    demand = [10, 30] * 3
    history = [record(t, d, d, 15 if t % 2 else 17, d) for t, d in enumerate(demand, 1)]
    assert compute_bullwhip(history)['wholesaler'] == 0.13
