"""
Results module.

Usage:
    from records_engine.features.results import Result, ResultRepository
    from records_engine.features.results.service import ResultService

Components:
- Result: SQLAlchemy model (contest and video-based results)
- ResultRepository: Round, team and contest participant queries
- ResultService: Create/update/delete with record and ranking bookkeeping
"""

from .models import Result
from .schemas import (
    ContestResultCreate,
    ContestResultUpdate,
    VideoBasedResultCreate,
    VideoBasedResultUpdate,
    ResultResponse,
    WrPairResponse,
)
from .repository import ResultRepository

__all__ = [
    # Model
    "Result",
    # Schemas
    "ContestResultCreate",
    "ContestResultUpdate",
    "VideoBasedResultCreate",
    "VideoBasedResultUpdate",
    "ResultResponse",
    "WrPairResponse",
    # Repository
    "ResultRepository",
]
