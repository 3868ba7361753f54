"""Profile model definitions."""
from typing import Optional

from pydantic import BaseModel

from tandem.models.base import Record


class ProfileCreate(BaseModel):
    """Profile creation model."""

    name: str
    contact: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Profile update model - all fields optional."""

    name: Optional[str] = None
    contact: Optional[str] = None
    bio: Optional[str] = None


class Profile(Record):
    """Full profile model. At most one per user."""

    user: str
    name: str
    contact: Optional[str] = None
    bio: Optional[str] = None
