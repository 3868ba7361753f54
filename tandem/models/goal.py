"""Goal model definitions."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from tandem.models.base import Record


class GoalStatus(str, Enum):
    """Goal states. PAST_DUE is derived from the due date."""

    PENDING = "pending"
    COMPLETE = "complete"
    PAST_DUE = "past due"


class GoalCreate(BaseModel):
    """Goal creation model."""

    title: str
    due: datetime
    description: str = ""


class GoalUpdate(BaseModel):
    """Goal update model - all fields optional."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due: Optional[datetime] = None


class Goal(Record):
    """Full goal model with database fields."""

    executor: str
    title: str
    description: str = ""
    status: GoalStatus
    due: datetime
