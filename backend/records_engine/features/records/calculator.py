"""
Best and average calculation.

Derives a result's best and average from its attempts, the round format
and the round's cutoff. Also decides whether an average can hold a record.

Rules:
- best is the lowest valid attempt, or DNF if there is none
- no average (0) if the cutoff wasn't made, the format counts fewer than
  3 attempts or not every attempt was entered
- DNF average if more than one attempt is DNF/DNS, or one is and the
  format doesn't drop the best and worst attempt
- average of 5 drops the best and (if there is no DNF) the worst attempt
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from records_engine.shared.constants import (
    CUTOFF_DATE_FOR_FLEXIBLE_AVERAGE_RECORDS,
    DNF,
    EventFormat,
    RoundFormat,
)
from records_engine.shared.round_formats import get_default_average_attempts, get_round_format


@dataclass(frozen=True)
class BestAndAverage:
    best: int
    average: int


def makes_cutoff(
    attempts: Sequence[int],
    cutoff_attempt_result: Optional[int],
    cutoff_number_of_attempts: Optional[int],
) -> bool:
    """True if the round has no cutoff or one of the first attempts is under it."""
    if not cutoff_attempt_result or not cutoff_number_of_attempts:
        return True
    return any(
        0 < attempt < cutoff_attempt_result
        for attempt in attempts[:cutoff_number_of_attempts]
    )


def get_best_and_average(
    attempts: Sequence[int],
    event_format: EventFormat | str,
    round_format: RoundFormat | str,
    cutoff_attempt_result: Optional[int] = None,
    cutoff_number_of_attempts: Optional[int] = None,
) -> BestAndAverage:
    """
    Calculate best and average of a result.

    Args:
        attempts: Attempt values in the order they were done
        event_format: Encoding of the event's attempts
        round_format: Format of the round (determines expected attempts)
        cutoff_attempt_result: Round cutoff value, if any
        cutoff_number_of_attempts: Attempts the cutoff has to be made in

    Returns:
        BestAndAverage with DNF (-1) or 0 (no average) where applicable
    """
    format_info = get_round_format(round_format)
    valid = [a for a in attempts if a > 0]
    dnf_dns_count = sum(1 for a in attempts if a < 0)
    entered_attempts = sum(1 for a in attempts if a != 0)

    best = min(valid) if valid else DNF

    if (
        not makes_cutoff(attempts, cutoff_attempt_result, cutoff_number_of_attempts)
        or format_info.attempts < 3
        or entered_attempts < format_info.attempts
    ):
        return BestAndAverage(best=best, average=0)

    if dnf_dns_count > 1 or (dnf_dns_count > 0 and format_info.value != RoundFormat.AVERAGE_OF_5):
        return BestAndAverage(best=best, average=DNF)

    counted = list(valid)
    if format_info.value == RoundFormat.AVERAGE_OF_5:
        counted.remove(min(counted))
        # With one DNF, the DNF is the dropped worst attempt
        if dnf_dns_count == 0:
            counted.remove(max(counted))

    multiplier = 100 if event_format == EventFormat.NUMBER else 1
    average = math.floor(sum(counted) / len(counted) * multiplier + 0.5)
    return BestAndAverage(best=best, average=average)


def is_average_record_eligible(
    number_of_attempts: int,
    result_date: date,
    default_round_format: RoundFormat | str,
) -> bool:
    """
    Whether a result's average may hold an average record.

    Before the flexible-average cutoff date any number of attempts counts,
    afterwards only the event's default number of average attempts.
    """
    if result_date < CUTOFF_DATE_FOR_FLEXIBLE_AVERAGE_RECORDS:
        return True
    return number_of_attempts == get_default_average_attempts(default_round_format)
