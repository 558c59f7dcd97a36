"""
Unified constants for records, results and rounds.

This module provides a single source of truth for the closed sets of
values used across the application (record types, categories, formats).
"""

from datetime import date
from enum import Enum


class RecordType(str, Enum):
    """
    Record tag a result can hold for its single or its average.

    WR implies every continental record and NR, a continental record implies NR.
    """
    WR = "WR"
    ER = "ER"
    NAR = "NAR"
    SAR = "SAR"
    ASR = "AsR"
    AFR = "AfR"
    OCR = "OcR"
    NR = "NR"

    @property
    def is_continental(self) -> bool:
        return self in CONTINENTAL_RECORD_TYPES


CONTINENTAL_RECORD_TYPES: frozenset[RecordType] = frozenset({
    RecordType.ER,
    RecordType.NAR,
    RecordType.SAR,
    RecordType.ASR,
    RecordType.AFR,
    RecordType.OCR,
})


class RecordCategory(str, Enum):
    """
    Isolation boundary for records.

    Results in different categories never affect each other's records.
    """
    COMPETITIONS = "competitions"
    MEETUPS = "meetups"
    VIDEO_BASED = "video-based-results"


class RecordMetric(str, Enum):
    """Which derived value of a result a record is about."""
    BEST = "best"
    AVERAGE = "average"

    @property
    def record_field(self) -> str:
        """Name of the Result column holding the record tag for this metric."""
        if self is RecordMetric.BEST:
            return "regional_single_record"
        return "regional_average_record"

    @property
    def label(self) -> str:
        """Human-readable name used in log messages."""
        return "single" if self is RecordMetric.BEST else "average"


class EventFormat(str, Enum):
    """How attempt values of an event are encoded."""
    TIME = "time"
    NUMBER = "number"  # e.g. number of moves
    MULTI = "multi"


class RoundFormat(str, Enum):
    """Round format (number of attempts and what the ranking is based on)."""
    BEST_OF_1 = "1"
    BEST_OF_2 = "2"
    BEST_OF_3 = "3"
    MEAN_OF_3 = "m"
    AVERAGE_OF_5 = "a"


class RoundType(str, Enum):
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    SEMI_FINAL = "s"
    FINAL = "f"


class RoundProceed(str, Enum):
    """How the number of competitors advancing to the next round is given."""
    NUMBER = "number"
    PERCENTAGE = "percentage"


class ContestType(str, Enum):
    MEETUP = "meetup"
    WCA_COMP = "wca-comp"
    COMP = "comp"

    @property
    def record_category(self) -> RecordCategory:
        if self is ContestType.MEETUP:
            return RecordCategory.MEETUPS
        return RecordCategory.COMPETITIONS


class ContestState(str, Enum):
    CREATED = "created"
    APPROVED = "approved"
    ONGOING = "ongoing"
    FINISHED = "finished"
    PUBLISHED = "published"
    REMOVED = "removed"


# =============================================================================
# Attempt values
# =============================================================================

SKIPPED_ATTEMPT = 0
DNF = -1
DNS = -2

# 24 hours in centiseconds
MAX_TIME = 24 * 60 * 60 * 100

# Accounts for the largest possible Multi-Blind result.
# Used as the "no record yet" value that every valid result beats.
MAX_RESULT = 999_999_999_999_999


# =============================================================================
# Record rules
# =============================================================================

# From this date onwards, average records are only set for results with the
# same number of attempts as the event's ranked average format
CUTOFF_DATE_FOR_FLEXIBLE_AVERAGE_RECORDS = date(2023, 1, 1)

# Share of a round's results that can proceed at most, regardless of the proceed rule
MAX_PROCEED_SHARE = 0.75
