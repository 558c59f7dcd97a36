"""
Event model.

An event is a discipline (e.g. a team relay) results are recorded for.
"""

from sqlalchemy import Column, String, Integer, Boolean, Text

from records_engine.models.base import Base
from records_engine.shared.constants import EventFormat, RoundFormat


class Event(Base):
    """Discipline with its attempt encoding and default round format."""

    __tablename__ = "events"

    event_id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)
    rank = Column(Integer, nullable=False, default=0)

    format = Column(String(10), nullable=False, default=EventFormat.TIME.value)
    # Determines how many attempts an average needs to be eligible for records
    default_round_format = Column(String(1), nullable=False, default=RoundFormat.AVERAGE_OF_5.value)
    # Number of people in one result (team events have more than one)
    participants = Column(Integer, nullable=False, default=1)

    submissions_allowed = Column(Boolean, nullable=False, default=False)
    hidden = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Event {self.event_id}>"
