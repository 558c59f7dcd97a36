"""
Total order over singles and averages.

All comparators return a negative number if `a` is better, 0 if they are
tied and a positive number if `b` is better. Any non-positive value
(DNF, DNS, not computed) is worse than any valid value, and all
non-positive values are tied with each other.
"""

from __future__ import annotations

from typing import Protocol

from records_engine.shared.constants import RecordMetric


class HasBest(Protocol):
    best: int


class HasBestAndAverage(Protocol):
    best: int
    average: int


def compare_values(a: int, b: int) -> int:
    """Compare two raw attempt or metric values (lower is better)."""
    if a <= 0 and b > 0:
        return 1
    if a > 0 and b <= 0:
        return -1
    if a <= 0 and b <= 0:
        return 0
    return a - b


def compare_singles(a: HasBest, b: HasBest) -> int:
    return compare_values(a.best, b.best)


def compare_averages(a: HasBestAndAverage, b: HasBestAndAverage, tie_break: bool = False) -> int:
    """Compare averages; with tie_break, equal averages are ordered by single."""
    comparison = compare_values(a.average, b.average)
    if comparison == 0 and tie_break:
        return compare_singles(a, b)
    return comparison


def compare_metric(a: HasBestAndAverage, b: HasBestAndAverage, metric: RecordMetric) -> int:
    """Compare the values the given record metric is about (no tie break)."""
    if metric is RecordMetric.BEST:
        return compare_singles(a, b)
    return compare_averages(a, b)
