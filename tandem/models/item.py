"""Item model definitions."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from tandem.models.base import Record


class ItemStatus(str, Enum):
    """Item states."""

    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"


class ItemCreate(BaseModel):
    """Item creation model."""

    title: str
    description: str


class ItemUpdate(BaseModel):
    """Item update model - all fields optional.

    ``status`` is a plain string so unknown values reach the concept's
    status check and come back as 400 rather than 422.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class Item(Record):
    """Full item model with database fields."""

    creator: str
    title: str
    description: str
    status: ItemStatus = ItemStatus.IN_PROGRESS
