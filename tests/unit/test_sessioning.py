"""Tests for SessioningConcept."""
import pytest
from bson import ObjectId


@pytest.mark.asyncio
class TestSessioning:
    """Tests for starting and ending sessions."""

    async def test_start_and_get_user(self, mock_db):
        from tandem.concepts.sessioning import SessioningConcept

        sessions = SessioningConcept(mock_db)
        session_id = await sessions.start("user123")

        assert await sessions.get_user(session_id) == "user123"
        assert await sessions.is_logged_in(session_id) is True

    async def test_end_logs_out(self, mock_db):
        from tandem.concepts.sessioning import SessioningConcept
        from tandem.errors import UnauthenticatedError

        sessions = SessioningConcept(mock_db)
        session_id = await sessions.start("user123")
        await sessions.end(session_id)

        with pytest.raises(UnauthenticatedError):
            await sessions.get_user(session_id)

    @pytest.mark.parametrize("session_id", [None, "garbage", str(ObjectId())])
    async def test_get_user_without_session(self, mock_db, session_id):
        from tandem.concepts.sessioning import SessioningConcept
        from tandem.errors import UnauthenticatedError

        with pytest.raises(UnauthenticatedError, match="Must be logged in"):
            await SessioningConcept(mock_db).get_user(session_id)

    async def test_is_logged_out(self, mock_db):
        from tandem.concepts.sessioning import SessioningConcept
        from tandem.errors import NotAllowedError

        sessions = SessioningConcept(mock_db)
        await sessions.is_logged_out(None)

        session_id = await sessions.start("user123")
        with pytest.raises(NotAllowedError, match="Must be logged out"):
            await sessions.is_logged_out(session_id)

    async def test_end_all(self, mock_db):
        from tandem.concepts.sessioning import SessioningConcept

        sessions = SessioningConcept(mock_db)
        first = await sessions.start("user123")
        second = await sessions.start("user123")
        other = await sessions.start("user456")

        assert await sessions.end_all("user123") == 2
        assert await sessions.is_logged_in(first) is False
        assert await sessions.is_logged_in(second) is False
        assert await sessions.is_logged_in(other) is True
