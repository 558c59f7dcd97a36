"""Rankings and proceeds of the results of one round."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import cmp_to_key, partial
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import MAX_PROCEED_SHARE, RoundFormat, RoundProceed
from records_engine.shared.round_formats import get_round_format
from records_engine.features.contests.models import Round
from records_engine.features.records.comparison import compare_averages, compare_singles
from records_engine.features.results.models import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingEntry:
    result_id: int
    ranking: int
    proceeds: Optional[bool]


def get_proceed_limit(
    number_of_results: int,
    proceed_type: RoundProceed | str,
    proceed_value: int,
) -> int:
    """Highest ranking that proceeds to the next round."""
    max_by_share = math.floor(number_of_results * MAX_PROCEED_SHARE)
    if proceed_type == RoundProceed.NUMBER:
        limit = proceed_value
    else:
        limit = math.floor(number_of_results * proceed_value / 100)
    return min(max_by_share, limit)


def compute_rankings(
    results: Sequence[Result],
    round_format: RoundFormat | str,
    proceed_type: Optional[RoundProceed | str] = None,
    proceed_value: Optional[int] = None,
) -> list[RankingEntry]:
    """
    Rank the results of a round.

    Tied results share a ranking and the next result gets its list
    position (1, 2, 2, 4). In average rounds equal averages are listed
    by single but still share a ranking. Proceeds is only computed when the round
    has a proceed rule, otherwise it's None.

    Args:
        results: All results of the round
        round_format: Format of the round (ranked by average or by single)
        proceed_type: Number or percentage of competitors that proceed
        proceed_value: The number or percentage

    Returns:
        Entries in ranking order
    """
    is_average = get_round_format(round_format).is_average
    sort_compare = partial(compare_averages, tie_break=True) if is_average else compare_singles
    # Equal averages share a ranking even when the singles differ
    rank_compare = compare_averages if is_average else compare_singles
    sorted_results = sorted(results, key=cmp_to_key(sort_compare))

    proceed_limit = None
    if proceed_value:
        proceed_limit = get_proceed_limit(len(sorted_results), proceed_type, proceed_value)

    entries: list[RankingEntry] = []
    ranking = 0
    for i, result in enumerate(sorted_results):
        if i == 0 or rank_compare(sorted_results[i - 1], result) < 0:
            ranking = i + 1

        proceeds = None
        if proceed_limit is not None:
            ranked_value = result.average if is_average else result.best
            proceeds = ranked_value > 0 and ranking <= proceed_limit

        entries.append(RankingEntry(result_id=result.id, ranking=ranking, proceeds=proceeds))

    return entries


async def set_ranking_and_proceeds(
    db: AsyncSession,
    round_: Round,
    results: Sequence[Result],
) -> int:
    """
    Recompute and store rankings and proceeds of a round's results.

    Only results whose ranking or proceeds changed are written.

    Returns:
        Number of results updated
    """
    entries = compute_rankings(results, round_.format, round_.proceed_type, round_.proceed_value)
    results_by_id = {r.id: r for r in results}
    updated = 0

    for entry in entries:
        result = results_by_id[entry.result_id]
        if result.ranking == entry.ranking and result.proceeds == entry.proceeds:
            continue
        result.ranking = entry.ranking
        result.proceeds = entry.proceeds
        updated += 1

    if updated:
        await db.flush()
        logger.debug(f"Updated rankings of {updated} results in round {round_.id}")
    return updated
