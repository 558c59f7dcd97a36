"""
Exception taxonomy of the records engine.

Validation, precondition and refusal errors are caller-correctable and are
raised before anything is persisted. RecordsInvariantError means the stored
records are inconsistent and must never be silently corrected.
"""


class RecordsEngineError(Exception):
    """Base records engine error."""
    pass


class ResultValidationError(RecordsEngineError):
    """The submitted result is invalid for its round or event."""
    pass


class PreconditionError(RecordsEngineError):
    """The operation is not allowed in the current state."""
    pass


class NotFoundError(PreconditionError):
    """A referenced entity does not exist."""
    pass


class RecordEditRefusedError(RecordsEngineError):
    """Changing an old result that holds or would hold a record."""
    pass


class RecordsInvariantError(RecordsEngineError):
    """Stored records or record configuration are inconsistent."""
    pass
