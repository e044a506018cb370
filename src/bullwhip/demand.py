"""
Demand Module
=============
Customer demand seen by the retailer at each tick.

Patterns:
    STEP_SHOCK - baseline until the shock tick, baseline * magnitude afterwards
    STABLE     - constant baseline
    SEASONAL   - sinusoid around the baseline, period ~52 ticks
    STOCHASTIC - baseline plus uniform noise, unseeded
"""

import math

from scipy.stats import uniform

from .utils import round_half_up


DEMAND_PATTERNS = ("STEP_SHOCK", "STABLE", "SEASONAL", "STOCHASTIC")

BASELINE_DEMAND = 20
SEASONAL_AMPLITUDE = 12
SEASONAL_HALF_PERIOD = 26
NOISE_SPAN = 18


def generate_demand(tick, pattern, shock_tick=20, magnitude=2.0):
    """
    Customer demand for one tick.

    Args:
        tick (int): Current tick (1-indexed)
        pattern (str): One of DEMAND_PATTERNS
        shock_tick (int): First tick of the shocked level (STEP_SHOCK)
        magnitude (float): Multiplier applied from the shock tick on

    Returns:
        int: Demand quantity
    """
    b = BASELINE_DEMAND

    if pattern == "STEP_SHOCK":
        return b if tick < shock_tick else round_half_up(b * magnitude)
    if pattern == "STABLE":
        return b
    if pattern == "SEASONAL":
        wave = SEASONAL_AMPLITUDE * math.sin(tick / SEASONAL_HALF_PERIOD * math.pi)
        return max(1, round_half_up(b + wave))
    if pattern == "STOCHASTIC":
        # Noise in [-span/2, span/2), drawn from the global numpy state
        half = NOISE_SPAN / 2
        noise = uniform.rvs(loc=-half, scale=NOISE_SPAN)
        return max(1, round_half_up(b + noise))
    return b
