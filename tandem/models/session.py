"""Session model definitions."""
from pydantic import BaseModel

from tandem.models.base import Record


class Session(Record):
    """A logged-in session. Deleted on logout."""

    user: str


class TokenData(BaseModel):
    """Claims carried by an access token."""

    user_id: str
    session_id: str
