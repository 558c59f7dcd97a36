"""Shared utilities: constants, region hierarchy, round formats, base repository."""
