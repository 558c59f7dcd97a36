"""
Round format definitions.

Contains only dataclasses with NO database imports
to avoid circular dependencies.
"""

from dataclasses import dataclass

from .constants import RoundFormat


@dataclass(frozen=True)
class RoundFormatInfo:
    """Static properties of a round format."""
    value: RoundFormat
    label: str
    short_label: str
    attempts: int
    is_average: bool  # ranked by average (True) or by single (False)


ROUND_FORMATS: list[RoundFormatInfo] = [
    RoundFormatInfo(RoundFormat.BEST_OF_1, "Best of 1", "Bo1", attempts=1, is_average=False),
    RoundFormatInfo(RoundFormat.BEST_OF_2, "Best of 2", "Bo2", attempts=2, is_average=False),
    RoundFormatInfo(RoundFormat.BEST_OF_3, "Best of 3", "Bo3", attempts=3, is_average=False),
    RoundFormatInfo(RoundFormat.MEAN_OF_3, "Mean of 3", "Mo3", attempts=3, is_average=True),
    RoundFormatInfo(RoundFormat.AVERAGE_OF_5, "Average of 5", "Ao5", attempts=5, is_average=True),
]


def get_round_format(value: RoundFormat | str) -> RoundFormatInfo:
    """Get the round format definition by its value."""
    for round_format in ROUND_FORMATS:
        if round_format.value == value:
            return round_format
    raise ValueError(f"Unknown round format: {value}")


def get_round_format_for_attempts(number_of_attempts: int) -> RoundFormatInfo:
    """
    Infer the round format of a result entered without a round.

    Three attempts are treated as a mean of 3, not a best of 3.
    """
    for round_format in ROUND_FORMATS:
        if round_format.attempts == number_of_attempts and round_format.value != RoundFormat.BEST_OF_3:
            return round_format
    raise ValueError(f"No round format has {number_of_attempts} attempts")


def get_default_average_attempts(default_round_format: RoundFormat | str) -> int:
    """Number of attempts a result needs to be eligible for an average record."""
    return 5 if get_round_format(default_round_format).attempts == 5 else 3
