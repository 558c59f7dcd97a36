"""
Contest and round models.

Only the fields the records engine reads are modelled here: contest type
and state, round format, time limit, cutoff and proceed rule.

Models:
- Contest: competition or meetup with its participant counter
- Round: one round of one event at a contest
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, ForeignKey, JSON

from records_engine.models.base import Base
from records_engine.shared.constants import ContestState, ContestType, RoundType


class Contest(Base):
    """Competition or meetup."""

    __tablename__ = "contests"

    competition_id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    short_name = Column(String(64), nullable=False)
    type = Column(String(10), nullable=False, default=ContestType.COMP.value)
    state = Column(String(10), nullable=False, default=ContestState.CREATED.value)
    region_code = Column(String(2), nullable=True)
    start_date = Column(Date, nullable=False)

    # Number of distinct people with results at the contest
    participants = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def record_category(self):
        return ContestType(self.type).record_category

    def __repr__(self):
        return f"<Contest {self.competition_id} ({self.type}, {self.state})>"


class Round(Base):
    """
    Round of an event at a contest.

    time_limit_cumulative_round_ids: if set, the time limit is cumulative across
    this round and the listed ones.
    cutoff: at least one of the first cutoff_number_of_attempts attempts must be
    better than cutoff_attempt_result for the rest to be done.
    proceed_type/proceed_value: advancement rule (not set for finals).
    """

    __tablename__ = "rounds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(
        String(64),
        ForeignKey("contests.competition_id"),
        nullable=False,
        index=True
    )
    event_id = Column(String(64), ForeignKey("events.event_id"), nullable=False)
    round_number = Column(Integer, nullable=False, default=1)
    round_type_id = Column(String(1), nullable=False, default=RoundType.FINAL.value)
    format = Column(String(1), nullable=False)

    time_limit_centiseconds = Column(Integer, nullable=True)
    time_limit_cumulative_round_ids = Column(JSON, nullable=True)
    cutoff_attempt_result = Column(Integer, nullable=True)
    cutoff_number_of_attempts = Column(Integer, nullable=True)

    proceed_type = Column(String(10), nullable=True)
    proceed_value = Column(Integer, nullable=True)

    open = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Round {self.id} {self.event_id} r{self.round_number} ({self.format})>"
