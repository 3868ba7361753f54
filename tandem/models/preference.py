"""Preference model definitions."""
from enum import Enum

from tandem.models.base import Record


class PreferenceLevel(str, Enum):
    """How strongly a user holds a preference."""

    REQUIRED = "required"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Preference(Record):
    """A user's preference."""

    user: str
    title: str
    description: str
    level: PreferenceLevel
