"""Numeric helpers for return series and correlation."""

from typing import Optional, Sequence

import pandas as pd

from cartera.domain.models import HistoryPoint


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(pd.Series(values, dtype=float).mean())


def close_series(points: Sequence[HistoryPoint]) -> pd.Series:
    """Closes indexed by date, in the points' own order."""
    return pd.Series(
        [p.close for p in points],
        index=pd.Index([p.date for p in points], name="date"),
        dtype=float,
    )


def compute_returns(series: Sequence[HistoryPoint]) -> pd.Series:
    """
    Day-over-day returns indexed by the date of the later point.

    Uses the series' own order. A zero previous close yields a 0 return.
    When a date repeats, its last return wins.
    """
    closes = close_series(series)
    previous = closes.shift(1)
    returns = (closes.diff() / previous).where(previous != 0, 0.0).iloc[1:]
    return returns[~returns.index.duplicated(keep="last")]


def clamp_correlation(r: float) -> Optional[float]:
    """NaN becomes None; floating-point overshoot is clamped to [-1, 1]."""
    if pd.isna(r):
        return None
    return max(-1.0, min(1.0, float(r)))


def pearson(xs: Sequence[float], ys: Sequence[float]) -> Optional[float]:
    """
    Pearson correlation coefficient of two aligned samples.

    Returns None for mismatched lengths, fewer than two observations, or a
    zero-variance sample.
    """
    if len(xs) != len(ys) or len(xs) < 2:
        return None

    x = pd.Series(xs, dtype=float)
    y = pd.Series(ys, dtype=float)
    if x.nunique() < 2 or y.nunique() < 2:
        return None
    return clamp_correlation(x.corr(y))
