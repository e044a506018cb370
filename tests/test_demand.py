import math

import pytest

from bullwhip.demand import generate_demand


@pytest.mark.parametrize(
    "tick, expected",
    [
        (1, 20),
        (14, 20),
        (15, 50),
        (100, 50),
    ],
)
def test_step_shock(tick, expected):
    assert generate_demand(tick, "STEP_SHOCK", shock_tick=15, magnitude=2.5) == expected


def test_step_shock_rounds_half_up():
    # 20 * 1.125 = 22.5
    assert generate_demand(30, "STEP_SHOCK", shock_tick=20, magnitude=1.125) == 23


def test_stable_is_constant():
    assert {generate_demand(t, "STABLE") for t in range(1, 101)} == {20}


def test_seasonal_wave():
    assert generate_demand(13, "SEASONAL") == 32
    assert generate_demand(39, "SEASONAL") == 8
    assert generate_demand(26, "SEASONAL") == 20
    for t in range(1, 101):
        expected = max(1, math.floor(20 + 12 * math.sin(t / 26 * math.pi) + 0.5))
        assert generate_demand(t, "SEASONAL") == expected


def test_stochastic_stays_within_noise_band():
    # Unseeded, so only the band can be asserted
    values = [generate_demand(t, "STOCHASTIC") for t in range(1, 501)]
    assert min(values) >= 11
    assert max(values) <= 29


def test_unknown_pattern_returns_baseline():
    assert generate_demand(5, "SOMETHING_ELSE") == 20
