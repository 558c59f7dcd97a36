"""
Event schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class EventResponse(BaseModel):
    """Event response."""

    model_config = ConfigDict(from_attributes=True)

    event_id: str
    name: str
    category: str
    rank: int
    format: str
    default_round_format: str
    participants: int
    submissions_allowed: bool
    description: Optional[str] = None
