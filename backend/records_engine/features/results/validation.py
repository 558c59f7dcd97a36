"""
Time limit and cutoff validation of contest results.
"""

from typing import Sequence

from records_engine.shared.exceptions import ResultValidationError
from records_engine.shared.formatters import format_centiseconds
from records_engine.features.contests.models import Round
from records_engine.features.records.calculator import makes_cutoff
from .models import Result


def validate_time_limit_and_cutoff(
    attempts: Sequence[int],
    round_: Round,
    expected_attempts: int,
    cumulative_results: Sequence[Result] = (),
) -> list[int]:
    """
    Check a result's attempts against the round's time limit and cutoff.

    Args:
        attempts: Submitted attempts
        round_: Round the result is for
        expected_attempts: Number of attempts of the round format
        cumulative_results: Results of the same competitor(s) in the other rounds
            sharing a cumulative time limit with this round

    Returns:
        The attempts, with the empty attempts after a missed cutoff removed

    Raises:
        ResultValidationError: If any check fails
    """
    output = list(attempts)
    time_limit = round_.time_limit_centiseconds

    if time_limit:
        if any(a > time_limit for a in attempts):
            raise ResultValidationError(
                f"This round has a time limit of {format_centiseconds(time_limit)}"
            )

        cumulative_round_ids = round_.time_limit_cumulative_round_ids
        if cumulative_round_ids is not None:
            total = sum(a for a in attempts if a > 0)
            total += sum(a for r in cumulative_results for a in r.attempts if a > 0)

            if total >= time_limit:
                rounds = ""
                if cumulative_round_ids:
                    rounds = f" for these rounds: {', '.join(str(i) for i in [round_.id, *cumulative_round_ids])}"
                raise ResultValidationError(
                    f"This round has a cumulative time limit of {format_centiseconds(time_limit)}{rounds}"
                )

    cutoff_result = round_.cutoff_attempt_result
    cutoff_attempts = round_.cutoff_number_of_attempts

    if cutoff_result and cutoff_attempts and not makes_cutoff(attempts, cutoff_result, cutoff_attempts):
        if len(attempts) > cutoff_attempts:
            if any(a != 0 for a in attempts[cutoff_attempts:]):
                raise ResultValidationError(
                    f"This round has a cutoff of {format_centiseconds(cutoff_result)}"
                )
            output = output[:cutoff_attempts]
        expected_attempts = cutoff_attempts

    if len(output) != expected_attempts:
        raise ResultValidationError(
            f"The number of attempts should be {expected_attempts}; received: {len(attempts)}"
        )

    return output
