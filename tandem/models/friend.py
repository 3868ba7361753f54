"""Friendship and friend request model definitions."""
from enum import Enum

from tandem.models.base import Record


class FriendRequestStatus(str, Enum):
    """Friend request states."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FriendRequest(Record):
    """A directional friend request (from_user -> to_user)."""

    from_user: str
    to_user: str
    status: FriendRequestStatus


class Friendship(Record):
    """A symmetric friend edge between two users."""

    user1: str
    user2: str
