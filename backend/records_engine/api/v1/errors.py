"""
Mapping of records engine errors to HTTP errors.
"""

import logging

from fastapi import HTTPException

from records_engine.shared.exceptions import (
    NotFoundError,
    PreconditionError,
    RecordEditRefusedError,
    RecordsEngineError,
    RecordsInvariantError,
    ResultValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: RecordsEngineError) -> HTTPException:
    """Convert an engine error to the HTTPException returned to the client."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, PreconditionError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, ResultValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, RecordEditRefusedError):
        return HTTPException(status_code=403, detail=str(error))
    if isinstance(error, RecordsInvariantError):
        logger.error(f"Records invariant violated: {error}")
    return HTTPException(status_code=500, detail="Internal error while updating records")
