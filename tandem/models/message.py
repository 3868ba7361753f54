"""Message model definitions.

A message is in exactly one of three states. Sending a draft moves it to
SENT and creates a second, RECEIVED record for the recipient; the two
records point at each other through ``linked_message_id``.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from tandem.models.base import Record


class MessageState(str, Enum):
    """Message lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    RECEIVED = "received"


# RECEIVED is only ever created, never entered.
TRANSITIONS: dict[MessageState, frozenset[MessageState]] = {
    MessageState.DRAFT: frozenset({MessageState.SENT}),
    MessageState.SENT: frozenset(),
    MessageState.RECEIVED: frozenset(),
}


def can_transition(current: MessageState, target: MessageState) -> bool:
    """Return True if a message in ``current`` may move to ``target``."""
    return target in TRANSITIONS[MessageState(current)]


class MessageCreate(BaseModel):
    """Draft creation model. ``contact`` is the recipient's username."""

    contact: str
    text: str
    attachment: Optional[str] = None


class MessageUpdate(BaseModel):
    """Message edit model - everything except ``id`` optional."""

    id: str
    contact: Optional[str] = None
    text: Optional[str] = None
    attachment: Optional[str] = None


class Message(Record):
    """Full message model with database fields."""

    sender: str
    recipient: str
    text: str
    attachment: Optional[str] = None
    state: MessageState
    drafted_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    received_at: Optional[datetime] = None
    linked_message_id: Optional[str] = None
