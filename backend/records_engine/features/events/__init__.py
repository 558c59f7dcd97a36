"""Events feature module."""

from .models import Event
from .repository import EventRepository
from .schemas import EventResponse

__all__ = ["Event", "EventRepository", "EventResponse"]
