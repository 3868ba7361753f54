"""Post model definitions."""
from typing import Optional

from pydantic import BaseModel

from tandem.models.base import Record


class PostOptions(BaseModel):
    """Display options for a post."""

    background_color: Optional[str] = None


class PostCreate(BaseModel):
    """Post creation model."""

    content: str
    options: Optional[PostOptions] = None


class PostUpdate(BaseModel):
    """Post update model - all fields optional."""

    content: Optional[str] = None
    options: Optional[PostOptions] = None


class Post(Record):
    """Full post model with database fields.

    ``author`` holds the author's user id in storage and the author's
    username in API responses.
    """

    author: str
    content: str
    options: Optional[PostOptions] = None
