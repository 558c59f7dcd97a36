"""Persons feature module."""

from .models import Person
from .repository import PersonRepository

__all__ = ["Person", "PersonRepository"]
