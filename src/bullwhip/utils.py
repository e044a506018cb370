"""
Utility Functions Module
=========================
Helper functions for rounding and for the bullwhip / variability metrics.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

import numpy as np
from scipy.stats import variation


TIERS = ("retailer", "wholesaler", "factory")

# Ratios stay at 1.0 until this many records exist
MIN_BULLWHIP_SAMPLES = 5


def round_half_up(x):
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(x + 0.5))


def round_places(x, places):
    """Round a float to `places` decimals, exact binary ties away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))


def coef_var(series):
    """
    Coefficient of variation of a series.

    CoV = population standard deviation / mean

    Args:
        series: Sequence of numbers

    Returns:
        float: CoV, or 0.0 for an empty series or a zero mean
    """
    values = np.asarray(series, dtype=float)
    if values.size == 0:
        return 0.0
    if np.mean(values) == 0:
        return 0.0
    return float(variation(values))


def compute_bullwhip(history):
    """
    Calculates the bullwhip ratio of every tier over a run's history.

    ratio = CoV(tier order series) / CoV(customer demand series)

    Args:
        history (list): History records as produced by tick_sim

    Returns:
        dict: {retailer, wholesaler, factory} ratios rounded to 2 decimals.
              All 1.0 until enough records have accumulated.
    """
    if len(history) < MIN_BULLWHIP_SAMPLES:
        return {tier: 1.0 for tier in TIERS}

    # Flat demand has no variability, keep the ratio finite
    demand_cv = coef_var([h["customer_demand"] for h in history]) or 0.001

    ratios = {}
    for tier in TIERS:
        orders = [h[tier]["last_order_placed"] for h in history]
        ratios[tier] = round_places(coef_var(orders) / demand_cv, 2)
    return ratios
