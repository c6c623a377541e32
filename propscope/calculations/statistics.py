"""
Summary Statistics

Median, mode and quartile helpers shared by every dataset summary.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

MIN_QUARTILE_SAMPLES = 4


@dataclass(frozen=True)
class Quartiles:
    """25th/50th/75th percentiles labelled as occupancy tiers."""

    worst: float
    current: float
    best: float


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """
    Median of the values.

    Even counts average the two middle values.

    Raises:
        ValueError: If values is empty
    """
    if len(values) == 0:
        raise ValueError("median requires at least one value")
    return float(np.median(np.asarray(values, dtype=float)))


def mode(values: Sequence[float]) -> List[float]:
    """
    Every value tied at the highest frequency, ascending.

    Returns an empty list when there is no mode: fewer than two values, or
    every value distinct.
    """
    series = pd.Series(values, dtype=float)
    if not series.duplicated().any():
        return []
    return series.mode().tolist()


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_mode(modes: Sequence[float]) -> str:
    """Render a mode list for display, e.g. ``"5, 7"`` or ``"N/A"``."""
    if not modes:
        return "N/A"
    return ", ".join(_format_number(v) for v in modes)


def quantile(values: Sequence[float], q: float) -> float:
    """Linear-interpolation quantile at position (n - 1) * q of the sorted values."""
    return float(np.quantile(np.asarray(values, dtype=float), q, method="linear"))


def quartiles(values: Sequence[float]) -> Optional[Quartiles]:
    """Quartiles of the values, or None with fewer than four samples."""
    if len(values) < MIN_QUARTILE_SAMPLES:
        return None
    return Quartiles(
        worst=quantile(values, 0.25),
        current=quantile(values, 0.5),
        best=quantile(values, 0.75),
    )
