"""Records & Rankings Consistency Engine."""

__version__ = "0.1.0"
