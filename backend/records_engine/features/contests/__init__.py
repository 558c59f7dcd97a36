"""Contests feature module: the contest and round metadata the engine reads."""

from .models import Contest, Round
from .repository import ContestRepository, RoundRepository

__all__ = ["Contest", "Round", "ContestRepository", "RoundRepository"]
