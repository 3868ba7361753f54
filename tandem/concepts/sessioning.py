"""Sessioning concept - one record per logged-in session."""
import logging
from typing import Optional

from tandem.concepts.base import Concept
from tandem.errors import NotAllowedError, UnauthenticatedError
from tandem.models.session import Session

logger = logging.getLogger(__name__)


class SessioningConcept(Concept[Session]):
    """Tracks which user each session belongs to."""

    model = Session
    collection_name = "sessions"
    entity = "session"

    async def start(self, user: str) -> str:
        """Start a session for ``user`` and return its id."""
        doc = await self.docs.create_one({"user": user})
        session_id = str(doc["_id"])
        logger.info("Session %s started for user %s", session_id, user)
        return session_id

    async def end(self, session_id: Optional[str]) -> None:
        """End a session. Ending an unknown session does nothing."""
        if session_id is None:
            return
        if await self.delete(session_id):
            logger.info("Session %s ended", session_id)

    async def end_all(self, user: str) -> int:
        """End every session belonging to ``user``."""
        return await self.docs.delete_many({"user": user})

    async def get_user(self, session_id: Optional[str]) -> str:
        """
        Get the user logged in to a session.

        Raises:
            UnauthenticatedError: If the session does not exist
        """
        session = await self.read(session_id) if session_id else None
        if session is None:
            raise UnauthenticatedError("Must be logged in!")
        return session.user

    async def is_logged_in(self, session_id: Optional[str]) -> bool:
        if session_id is None:
            return False
        return await self.read(session_id) is not None

    async def is_logged_out(self, session_id: Optional[str]) -> None:
        """
        Raises:
            NotAllowedError: If the session is logged in
        """
        if await self.is_logged_in(session_id):
            raise NotAllowedError("Must be logged out!")
