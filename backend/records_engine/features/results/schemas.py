"""
Result schemas.

Pydantic models for result operations.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from records_engine.shared.constants import DNS, SKIPPED_ATTEMPT


class AttemptsInput(BaseModel):
    """Attempts of a submitted result."""

    attempts: list[int] = Field(min_length=1, max_length=5)

    @field_validator('attempts')
    @classmethod
    def check_attempts(cls, v: list[int]) -> list[int]:
        if any(a < DNS for a in v):
            raise ValueError("Attempt values must be DNS (-2), DNF (-1), 0 (not attempted) or positive")
        if all(a in (SKIPPED_ATTEMPT, DNS) for a in v):
            raise ValueError("You cannot submit only DNS attempts or only empty attempts")
        return v


class ParticipantsInput(AttemptsInput):
    """Attempts and participants of a new result."""

    person_ids: list[int] = Field(min_length=1)

    @field_validator('person_ids')
    @classmethod
    def check_person_ids(cls, v: list[int]) -> list[int]:
        if len(set(v)) != len(v):
            raise ValueError("You cannot enter the same person twice in the same result")
        return v


class ContestResultCreate(ParticipantsInput):
    """Create contest result request."""

    competition_id: str
    event_id: str
    round_id: int


class ContestResultUpdate(AttemptsInput):
    """Update contest result request (new attempts)."""
    pass


class VideoBasedResultCreate(ParticipantsInput):
    """Submit video-based result request."""

    event_id: str
    date: date
    video_link: str = ""
    discussion_link: Optional[str] = None


class VideoBasedResultUpdate(AttemptsInput):
    """Edit (and optionally approve) a pending video-based result."""

    date: date
    video_link: str = ""
    discussion_link: Optional[str] = None
    approve: bool = False


class ResultResponse(BaseModel):
    """Result response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: str
    date: date
    approved: bool
    person_ids: list[int]
    region_code: Optional[str]
    super_region_code: Optional[str]
    attempts: list[int]
    best: int
    average: int
    record_category: str
    regional_single_record: Optional[str]
    regional_average_record: Optional[str]
    competition_id: Optional[str] = None
    round_id: Optional[int] = None
    ranking: Optional[int] = None
    proceeds: Optional[bool] = None
    video_link: Optional[str] = None
    discussion_link: Optional[str] = None
    created_at: Optional[datetime] = None


class WrPairResponse(BaseModel):
    """Current world record single and average of an event."""

    event_id: str
    best: Optional[int] = None
    average: Optional[int] = None
