"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
(create_all and Alembic autogenerate only see imported models).
"""

from records_engine.models.base import Base
from records_engine.features.events.models import Event
from records_engine.features.persons.models import Person
from records_engine.features.contests.models import Contest, Round
from records_engine.features.records.models import RecordConfig
from records_engine.features.results.models import Result

__all__ = [
    "Base",
    "Event",
    "Person",
    "Contest",
    "Round",
    "RecordConfig",
    "Result",
]
