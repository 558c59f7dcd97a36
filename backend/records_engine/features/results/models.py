"""
Result model.

The only entity the records engine mutates. A result is either a contest
result (competition_id, round_id, ranking, proceeds) or a video-based result
(video_link, discussion_link).
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, BigInteger, Boolean, Date, DateTime, ForeignKey, JSON, Index
)

from records_engine.models.base import Base


class Result(Base):
    """
    Result of one person or team in one event.

    attempts: attempt values, positive = valid, 0 = not attempted, -1 = DNF, -2 = DNS.
    best/average: derived values, <= 0 means no valid value.
    region_code: only set if all participants are from the same region.
    super_region_code: only set if all participants are from the same super-region.
    regional_single_record/regional_average_record: currently held record tag.
    """

    __tablename__ = "results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(64), ForeignKey("events.event_id"), nullable=False)
    date = Column(Date, nullable=False)
    approved = Column(Boolean, nullable=False, default=False)
    person_ids = Column(JSON, nullable=False)

    region_code = Column(String(2), nullable=True)
    super_region_code = Column(String(20), nullable=True)

    attempts = Column(JSON, nullable=False)
    best = Column(BigInteger, nullable=False)
    average = Column(BigInteger, nullable=False)

    record_category = Column(String(30), nullable=False)
    regional_single_record = Column(String(3), nullable=True)
    regional_average_record = Column(String(3), nullable=True)

    # Contest results only
    competition_id = Column(String(64), ForeignKey("contests.competition_id"), nullable=True)
    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=True, index=True)
    ranking = Column(Integer, nullable=True)
    proceeds = Column(Boolean, nullable=True)  # non-final rounds only

    # Video-based results only
    video_link = Column(String(500), nullable=True)
    discussion_link = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_results_partition_date", "event_id", "record_category", "date"),
    )

    @property
    def is_contest_result(self) -> bool:
        return self.competition_id is not None

    def __repr__(self):
        return (
            f"<Result {self.id} {self.event_id} {self.date} "
            f"best={self.best} avg={self.average} "
            f"{self.regional_single_record}/{self.regional_average_record}>"
        )
