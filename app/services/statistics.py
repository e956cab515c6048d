"""Descriptive statistics shared by the aggregator and the insight generator.

Standard deviation is the sample definition (ddof=1) everywhere, so the
per-group ``stdDev`` and the cross-group variation check agree. Fixed-decimal
output rounds exact ties up (``0.125`` -> ``"0.13"``).
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Sequence

import pandas as pd


def round_half_up(value: float, places: int = 2) -> Decimal:
    """Round the exact binary value of ``value`` to ``places`` decimals, ties away from zero."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_fixed(value: float, places: int = 2) -> str:
    """Format a number to a fixed number of decimals (string)."""
    return str(round_half_up(value, places))


def format_pct(value: float) -> str:
    """Format a percentage to one decimal (string)."""
    return format_fixed(value, 1)


def mean(values: Sequence[float]) -> float:
    """Mean with guards; returns NaN for an empty sequence."""
    if not values:
        return float("nan")
    return float(pd.Series(values, dtype="float64").mean())


def sample_std(values: Sequence[float]) -> float:
    """Sample standard deviation; 0.0 for a single value, NaN when empty."""
    if not values:
        return float("nan")
    if len(values) == 1:
        return 0.0
    return float(pd.Series(values, dtype="float64").std(ddof=1))


def describe(values: Sequence[float]) -> Dict[str, float]:
    """Count, sum, mean, min, max, median and sample std of ``values``.

    ``values`` must be non-empty.
    """
    series = pd.Series(values, dtype="float64")
    lo, hi = float(series.min()), float(series.max())
    # summation rounding can push the mean just outside [min, max]
    avg = min(max(float(series.mean()), lo), hi)
    return {
        "count": int(series.size),
        "sum": float(series.sum()),
        "avg": avg,
        "min": lo,
        "max": hi,
        "median": float(series.median()),
        "std_dev": sample_std(values),
    }
