"""
Result Service

Creates, updates and deletes contest and video-based results, keeping
the record tags and round rankings consistent:
- best/average from the attempts
- region codes and record tags of the result itself
- cancelling records of later results it beats
- restoring records of later results it no longer beats
- rankings and proceeds of the round, contest participant counter

Every public method is one transaction: it either commits everything
or rolls back and re-raises.
"""

import logging
from datetime import date
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.config import settings
from records_engine.shared.constants import (
    MAX_TIME,
    ContestState,
    RecordCategory,
    RecordMetric,
    RecordType,
)
from records_engine.shared.exceptions import (
    NotFoundError,
    PreconditionError,
    RecordEditRefusedError,
    ResultValidationError,
)
from records_engine.shared.regions import get_shared_regions
from records_engine.shared.round_formats import get_round_format, get_round_format_for_attempts
from records_engine.features.contests.models import Contest, Round
from records_engine.features.contests.repository import ContestRepository, RoundRepository
from records_engine.features.events.models import Event
from records_engine.features.events.repository import EventRepository
from records_engine.features.persons.models import Person
from records_engine.features.persons.repository import PersonRepository
from records_engine.features.rankings.calculator import set_ranking_and_proceeds
from records_engine.features.records.assigner import (
    set_result_records,
    set_result_records_and_regions,
)
from records_engine.features.records.calculator import get_best_and_average
from records_engine.features.records.comparison import compare_values
from records_engine.features.records.invalidator import cancel_future_records
from records_engine.features.records.lookup import get_record_result
from records_engine.features.records.models import RecordConfig
from records_engine.features.records.repository import get_record_configs, get_records
from records_engine.features.records.restorer import ResultSnapshot, set_future_records
from .models import Result
from .repository import ResultRepository
from .schemas import (
    ContestResultCreate,
    ContestResultUpdate,
    VideoBasedResultCreate,
    VideoBasedResultUpdate,
    WrPairResponse,
)
from .validation import validate_time_limit_and_cutoff

logger = logging.getLogger(__name__)

_UNSET = object()


class ResultService:
    """Result operations with record and ranking bookkeeping."""

    def __init__(self, db: AsyncSession, record_edit_max_age_days=_UNSET):
        """
        Args:
            db: Async database session (one operation = one transaction)
            record_edit_max_age_days: Overrides the configured age limit for
                changing results with records (None disables it)
        """
        self.db = db
        self.contests = ContestRepository(db)
        self.rounds = RoundRepository(db)
        self.events = EventRepository(db)
        self.persons = PersonRepository(db)
        self.results = ResultRepository(db)

        if record_edit_max_age_days is _UNSET:
            record_edit_max_age_days = settings.record_edit_max_age_days
        self.record_edit_max_age_days: Optional[int] = record_edit_max_age_days

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_wr_pair(
        self,
        event_id: str,
        category: RecordCategory,
        records_up_to: Optional[date] = None,
        exclude_result_id: Optional[int] = None,
    ) -> WrPairResponse:
        """Get the world record single and average of an event as of a date."""
        await self._get_event(event_id)

        pair = {}
        for metric in RecordMetric:
            record_result = await get_record_result(
                self.db, event_id, metric, RecordType.WR, category,
                records_up_to=records_up_to,
                exclude_result_id=exclude_result_id,
            )
            pair[metric.value] = getattr(record_result, metric.value) if record_result else None

        return WrPairResponse(event_id=event_id, **pair)

    async def get_video_based_events(self) -> list[Event]:
        """Events that accept video-based submissions, in display order."""
        return await self.events.get_video_based_events()

    async def get_round_results(self, round_id: int) -> list[Result]:
        round_ = await self.rounds.get(round_id)
        if not round_:
            raise NotFoundError(f"Round with ID {round_id} not found")
        return await self.results.get_round_results(round_id)

    async def get_records(
        self,
        category: RecordCategory,
        event_id: Optional[str] = None,
        region: Optional[str] = None,
    ) -> list[Result]:
        """Current record holders of a category, newest first."""
        return await get_records(self.db, category, event_id=event_id, region=region)

    # =========================================================================
    # Contest results
    # =========================================================================

    async def create_contest_result(self, dto: ContestResultCreate) -> list[Result]:
        """
        Enter a result in an open round.

        Returns:
            All results of the round, ordered by ranking
        """
        logger.info(
            f"Creating contest result for contest {dto.competition_id}, event {dto.event_id}, "
            f"round {dto.round_id} and persons {dto.person_ids}: {dto.attempts}"
        )

        try:
            contest = await self._get_contest(dto.competition_id)
            event = await self._get_event(dto.event_id)
            rounds = await self.rounds.get_event_rounds(contest.competition_id, event.event_id)
            round_ = next((r for r in rounds if r.id == dto.round_id), None)
            if not round_:
                raise NotFoundError(f"Round with ID {dto.round_id} not found")
            if not round_.open:
                raise PreconditionError("The round is not open")

            participants = await self.persons.get_many(dto.person_ids)
            self._check_participants(dto.person_ids, participants, event)

            round_results = await self.results.get_round_results(round_.id)
            if any(set(r.person_ids) & set(dto.person_ids) for r in round_results):
                raise PreconditionError("The competitor(s) already has a result in this round")
            await self._check_proceeded(dto.person_ids, round_, rounds, event)

            attempts = await self._validate_attempts(dto.attempts, dto.person_ids, round_)
            record_configs = await get_record_configs(self.db, contest.record_category)
            values = get_best_and_average(
                attempts,
                event.format,
                round_.format,
                round_.cutoff_attempt_result,
                round_.cutoff_number_of_attempts,
            )

            result = Result(
                event_id=event.event_id,
                date=contest.start_date,
                approved=True,
                person_ids=list(dto.person_ids),
                attempts=attempts,
                best=values.best,
                average=values.average,
                record_category=contest.record_category.value,
                competition_id=contest.competition_id,
                round_id=round_.id,
                ranking=1,
            )
            await set_result_records_and_regions(self.db, result, event, record_configs, participants)
            self._check_record_edit_age(
                result.date, result.regional_single_record, result.regional_average_record
            )

            await self.results.add(result)
            await set_ranking_and_proceeds(self.db, round_, [*round_results, result])
            await self._cancel_future_records(result, event, record_configs)

            if contest.state == ContestState.APPROVED.value:
                contest.state = ContestState.ONGOING.value
            await self._update_contest_participants(contest)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return await self.results.get_round_results(round_.id)

    async def update_contest_result(self, result_id: int, dto: ContestResultUpdate) -> list[Result]:
        """
        Change the attempts of a contest result.

        Returns:
            All results of the round, ordered by ranking
        """
        logger.info(f"Updating result with ID {result_id} (new attempts: {dto.attempts})")

        try:
            result = await self.results.get_contest_result(result_id)
            if not result:
                raise NotFoundError(f"Result with ID {result_id} not found")

            contest = await self._get_contest(result.competition_id)
            event = await self._get_event(result.event_id)
            round_ = await self._get_round(result.round_id)
            record_configs = await get_record_configs(self.db, contest.record_category)

            attempts = await self._validate_attempts(dto.attempts, result.person_ids, round_)
            values = get_best_and_average(
                attempts,
                event.format,
                round_.format,
                round_.cutoff_attempt_result,
                round_.cutoff_number_of_attempts,
            )

            previous = ResultSnapshot.from_result(result)
            result.attempts = attempts
            result.best = values.best
            result.average = values.average
            await set_result_records(self.db, result, event, record_configs)

            self._check_record_edit_age(
                previous.date,
                previous.regional_single_record,
                previous.regional_average_record,
                result.regional_single_record,
                result.regional_average_record,
            )
            await self.db.flush()

            round_results = await self.results.get_round_results(round_.id)
            await set_ranking_and_proceeds(self.db, round_, round_results)

            comparisons = {
                metric: compare_values(getattr(result, metric.value), getattr(previous, metric.value))
                for metric in RecordMetric
            }

            # Got worse: restore the records it no longer prevents, then re-check
            # its own records against the restored ones from the same day
            restored = False
            for metric in RecordMetric:
                if previous.get_record(metric) and comparisons[metric] > 0:
                    await set_future_records(self.db, previous, event, metric, record_configs)
                    restored = True
            if restored:
                await set_result_records(self.db, result, event, record_configs)
                await self.db.flush()

            # Got better: cancel the records it now beats
            for metric in RecordMetric:
                if getattr(result, metric.record_field) and comparisons[metric] < 0:
                    await cancel_future_records(self.db, result, event, metric, record_configs)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return await self.results.get_round_results(round_.id)

    async def delete_contest_result(self, result_id: int) -> list[Result]:
        """
        Delete a contest result.

        Returns:
            The remaining results of the round, ordered by ranking
        """
        try:
            result = await self.results.get_contest_result(result_id)
            if not result:
                raise NotFoundError(f"Result with ID {result_id} not found")
            self._check_record_edit_age(
                result.date, result.regional_single_record, result.regional_average_record
            )

            logger.info(f"Deleting contest result: {result!r}")

            contest = await self._get_contest(result.competition_id)
            event = await self._get_event(result.event_id)
            round_ = await self._get_round(result.round_id)
            record_configs = await get_record_configs(self.db, contest.record_category)

            deleted = ResultSnapshot.from_result(result)
            await self.results.delete(result)

            round_results = await self.results.get_round_results(round_.id)
            await set_ranking_and_proceeds(self.db, round_, round_results)

            for metric in RecordMetric:
                if deleted.get_record(metric):
                    await set_future_records(self.db, deleted, event, metric, record_configs)

            await self._update_contest_participants(contest)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return await self.results.get_round_results(round_.id)

    # =========================================================================
    # Video-based results
    # =========================================================================

    async def create_video_based_result(
        self,
        dto: VideoBasedResultCreate,
        can_approve: bool = False,
    ) -> Result:
        """
        Submit a video-based result.

        Results submitted by someone who can approve them are approved right
        away; only approved results hold records.
        """
        logger.info(f"Creating video-based result: {dto.model_dump()}")
        self._check_video_based_submission(dto.attempts, dto.video_link, can_approve)

        try:
            event = await self._get_event(dto.event_id)
            if not event.submissions_allowed and not can_approve:
                raise PreconditionError(f"Submissions are not allowed for event {event.event_id}")
            participants = await self.persons.get_many(dto.person_ids)
            self._check_participants(dto.person_ids, participants, event)

            record_configs = await get_record_configs(self.db, RecordCategory.VIDEO_BASED)
            round_format = self._get_video_based_round_format(len(dto.attempts))
            values = get_best_and_average(dto.attempts, event.format, round_format)

            result = Result(
                event_id=event.event_id,
                date=dto.date,
                approved=can_approve,
                person_ids=list(dto.person_ids),
                attempts=list(dto.attempts),
                best=values.best,
                average=values.average,
                record_category=RecordCategory.VIDEO_BASED.value,
                video_link=dto.video_link,
                discussion_link=dto.discussion_link,
            )

            if can_approve:
                await set_result_records_and_regions(self.db, result, event, record_configs, participants)
            else:
                result.region_code, result.super_region_code = get_shared_regions(
                    p.region_code for p in participants
                )

            await self.results.add(result)
            if result.approved:
                await self._cancel_future_records(result, event, record_configs)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return result

    async def update_video_based_result(self, result_id: int, dto: VideoBasedResultUpdate) -> Result:
        """Edit a pending video-based result, optionally approving it."""
        logger.info(f"Updating video-based result with ID {result_id}: {dto.model_dump()}")

        try:
            result = await self.results.get_video_based_result(result_id)
            if not result:
                raise NotFoundError(f"Result with ID {result_id} not found")
            if result.approved:
                raise PreconditionError(
                    "Editing approved results is not allowed. Please contact a sysadmin."
                )

            event = await self._get_event(result.event_id)
            if len(dto.attempts) != len(result.attempts):
                raise ResultValidationError("The number of attempts cannot be changed")

            record_configs = await get_record_configs(self.db, RecordCategory.VIDEO_BASED)
            round_format = self._get_video_based_round_format(len(dto.attempts))
            values = get_best_and_average(dto.attempts, event.format, round_format)

            result.date = dto.date
            result.approved = dto.approve
            result.attempts = list(dto.attempts)
            result.best = values.best
            result.average = values.average
            result.video_link = dto.video_link
            result.discussion_link = dto.discussion_link

            if dto.approve:
                await set_result_records(self.db, result, event, record_configs)
            else:
                result.regional_single_record = None
                result.regional_average_record = None
            await self.db.flush()

            if dto.approve:
                await self._cancel_future_records(result, event, record_configs)
                await self._approve_persons(result.person_ids)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return result

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _get_contest(self, competition_id: str) -> Contest:
        contest = await self.contests.get(competition_id)
        if not contest:
            raise NotFoundError(f"Contest with ID {competition_id} not found")
        return contest

    async def _get_event(self, event_id: str) -> Event:
        event = await self.events.get(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    async def _get_round(self, round_id: int) -> Round:
        round_ = await self.rounds.get(round_id)
        if not round_:
            raise NotFoundError(f"Round with ID {round_id} not found")
        return round_

    @staticmethod
    def _check_participants(
        person_ids: Sequence[int],
        participants: Sequence[Person],
        event: Event,
    ) -> None:
        found_ids = {p.id for p in participants}
        missing_id = next((pid for pid in person_ids if pid not in found_ids), None)
        if missing_id is not None:
            raise NotFoundError(f"Person with ID {missing_id} not found")

        if len(person_ids) != event.participants:
            plural = "s" if event.participants > 1 else ""
            raise ResultValidationError(
                f"This event must have {event.participants} participant{plural}"
            )

    async def _check_proceeded(
        self,
        person_ids: Sequence[int],
        round_: Round,
        rounds: Sequence[Round],
        event: Event,
    ) -> None:
        """Every competitor must have proceeded from the previous round."""
        if round_.round_number <= 1:
            return

        previous_round = next(
            (r for r in rounds if r.round_number == round_.round_number - 1), None
        )
        previous_results = (
            await self.results.get_round_results(previous_round.id) if previous_round else []
        )

        for i, person_id in enumerate(person_ids):
            if not any(r.proceeds and person_id in r.person_ids for r in previous_results):
                competitor = f"Competitor {i + 1}" if event.participants > 1 else "Competitor"
                raise PreconditionError(f"{competitor} has not proceeded to this round")

    async def _validate_attempts(
        self,
        attempts: Sequence[int],
        person_ids: Sequence[int],
        round_: Round,
    ) -> list[int]:
        cumulative_results = await self.results.get_same_team_results(
            round_.time_limit_cumulative_round_ids or [], person_ids
        )
        return validate_time_limit_and_cutoff(
            attempts,
            round_,
            get_round_format(round_.format).attempts,
            cumulative_results,
        )

    def _check_record_edit_age(self, result_date: date, *records: Optional[str]) -> None:
        """Refuse changes to old results that hold or would hold a record."""
        max_age = self.record_edit_max_age_days
        if max_age is None or not any(records):
            return

        if (date.today() - result_date).days > max_age:
            raise RecordEditRefusedError(
                f"The result is more than {max_age} days old and contains a record, which could "
                "affect other records. Please contact the development team."
            )

    @staticmethod
    def _check_video_based_submission(
        attempts: Sequence[int],
        video_link: str,
        can_approve: bool,
    ) -> None:
        if can_approve:
            return
        if not video_link:
            raise ResultValidationError("Please enter a video link")
        if any(a == MAX_TIME for a in attempts):
            raise ResultValidationError("You are not authorized to set unknown time")

    @staticmethod
    def _get_video_based_round_format(number_of_attempts: int) -> str:
        try:
            return get_round_format_for_attempts(number_of_attempts).value
        except ValueError:
            raise ResultValidationError(
                f"A result cannot have {number_of_attempts} attempts"
            ) from None

    async def _cancel_future_records(
        self,
        result: Result,
        event: Event,
        record_configs: Sequence[RecordConfig],
    ) -> None:
        for metric in RecordMetric:
            if getattr(result, metric.record_field):
                await cancel_future_records(self.db, result, event, metric, record_configs)

    async def _update_contest_participants(self, contest: Contest) -> None:
        participant_ids = await self.results.get_contest_participant_ids(contest.competition_id)
        if len(participant_ids) != contest.participants:
            contest.participants = len(participant_ids)
        await self.db.flush()

    async def _approve_persons(self, person_ids: Sequence[int]) -> None:
        for person in await self.persons.get_many(person_ids):
            if not person.approved:
                person.approved = True
                logger.info(f"Approved person {person.name} (ID {person.id})")
