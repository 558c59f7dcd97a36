"""Feature modules of the records engine."""
