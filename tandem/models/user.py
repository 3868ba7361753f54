"""User model definitions."""
from pydantic import BaseModel

from tandem.models.base import Record


class UserCreate(BaseModel):
    """User registration model with password."""

    username: str
    password: str


class UsernameUpdate(BaseModel):
    """Username change request."""

    username: str


class PasswordUpdate(BaseModel):
    """Password change request."""

    current_password: str
    new_password: str


class User(Record):
    """User model without password (for API responses)."""

    username: str


class UserInDB(User):
    """User model with hashed password (for database storage)."""

    hashed_password: str
