"""Tests for MessagingConcept."""
import pytest
from bson import ObjectId


@pytest.mark.asyncio
class TestDrafts:
    """Tests for drafting and editing drafts."""

    async def test_draft(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept
        from tandem.models.message import MessageState

        draft = await MessagingConcept(mock_db).draft("alice", "bob", "hi")

        assert draft.state == MessageState.DRAFT
        assert draft.drafted_at is not None
        assert draft.sent_at is None
        assert draft.linked_message_id is None

    async def test_read_drafts(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        sent = await messaging.draft("alice", "bob", "sent one")
        await messaging.send(sent.id, "alice", "bob")

        assert [m.id for m in await messaging.read_drafts("alice")] == [draft.id]
        assert await messaging.read_drafts("bob") == []

    async def test_edit_draft_keeps_omitted_fields(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi", attachment="file1")

        edited = await messaging.edit_draft(draft.id, recipient="carol")

        assert edited.recipient == "carol"
        assert edited.text == "hi"
        assert edited.attachment == "file1"

    async def test_edit_draft_rejects_sent(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept, NotADraftError

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        await messaging.send(draft.id, "alice", "bob")

        with pytest.raises(NotADraftError):
            await messaging.edit_draft(draft.id, text="changed")

    async def test_delete_draft(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        assert await messaging.delete_draft(draft.id) == 1
        assert await messaging.delete_draft(draft.id) == 0


@pytest.mark.asyncio
class TestSend:
    """Tests for sending drafts."""

    async def test_send_creates_linked_pair(self, mock_db):
        """Test that sending yields a sent copy and a received copy linked by id."""
        from tandem.concepts.messaging import MessagingConcept
        from tandem.models.message import MessageState

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        sent, received = await messaging.send(draft.id, "alice", "bob")

        assert sent.id == draft.id
        assert sent.state == MessageState.SENT
        assert sent.drafted_at is None
        assert sent.sent_at is not None
        assert received.state == MessageState.RECEIVED
        assert received.received_at == sent.sent_at
        assert sent.text == received.text == "hi"
        assert sent.linked_message_id == received.id
        assert received.linked_message_id == sent.id
        stored = await mock_db["messages"].find_one({"_id": ObjectId(sent.id)})
        assert "drafted_at" not in stored

    async def test_read_sent_and_received(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        sent, received = await messaging.send(draft.id, "alice", "bob")

        assert [m.id for m in await messaging.read_sent("alice", "bob")] == [sent.id]
        assert [m.id for m in await messaging.read_received("bob", "alice")] == [received.id]
        assert await messaging.read_received("alice", "bob") == []

    async def test_send_twice_fails(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept, NotADraftError

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        await messaging.send(draft.id, "alice", "bob")

        with pytest.raises(NotADraftError):
            await messaging.send(draft.id, "alice", "bob")

        assert await mock_db["messages"].count_documents({}) == 2

    async def test_send_missing(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept
        from tandem.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await MessagingConcept(mock_db).send(str(ObjectId()), "alice", "bob")

    async def test_send_failure_removes_received_copy(self, mock_db, monkeypatch):
        """Test that a failed state change does not leave a received copy behind."""
        from tandem.concepts.messaging import MessagingConcept
        from tandem.models.message import MessageState

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        async def broken_update(*args, **kwargs):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(messaging.docs, "partial_update_one", broken_update)

        with pytest.raises(RuntimeError):
            await messaging.send(draft.id, "alice", "bob")

        docs = await mock_db["messages"].find({}).to_list(length=None)
        assert len(docs) == 1
        assert docs[0]["state"] == MessageState.DRAFT.value


@pytest.mark.asyncio
class TestEditSent:
    """Tests for editing sent messages."""

    async def test_edit_sent_updates_both_copies(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        sent, received = await messaging.send(draft.id, "alice", "bob")

        edited = await messaging.edit_sent(sent.id, text="hello")

        assert edited.text == "hello"
        assert (await messaging.read(received.id)).text == "hello"
        assert (await messaging.read(sent.id)).text == (await messaging.read(received.id)).text

    async def test_edit_sent_rejects_draft(self, mock_db):
        from tandem.concepts.messaging import MessageNotSentError, MessagingConcept
        from tandem.errors import NotAllowedError

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        with pytest.raises(MessageNotSentError):
            await messaging.edit_sent(draft.id, text="hello")
        assert issubclass(MessageNotSentError, NotAllowedError)

    async def test_edit_sent_failure_restores_sender_copy(self, mock_db, monkeypatch):
        """Test that a failed write to the received copy rolls back the sent copy."""
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        sent, received = await messaging.send(draft.id, "alice", "bob")

        real_update = messaging.docs.partial_update_one
        received_oid = ObjectId(received.id)

        async def flaky_update(query, fields, unset=()):
            if query.get("_id") == received_oid:
                raise RuntimeError("connection lost")
            return await real_update(query, fields, unset)

        monkeypatch.setattr(messaging.docs, "partial_update_one", flaky_update)

        with pytest.raises(RuntimeError):
            await messaging.edit_sent(sent.id, text="hello")

        assert (await messaging.read(sent.id)).text == "hi"
        assert (await messaging.read(received.id)).text == "hi"


@pytest.mark.asyncio
class TestDeleteSent:
    """Tests for deleting sent messages."""

    async def test_delete_sent_removes_both_copies(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")
        sent, received = await messaging.send(draft.id, "alice", "bob")
        other = await messaging.draft("alice", "bob", "keep me")

        assert await messaging.delete_sent(sent.id) == 2

        assert await messaging.read(sent.id) is None
        assert await messaging.read(received.id) is None
        assert await messaging.read(other.id) is not None

    async def test_delete_sent_rejects_draft(self, mock_db):
        from tandem.concepts.messaging import MessageNotSentError, MessagingConcept

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        with pytest.raises(MessageNotSentError):
            await messaging.delete_sent(draft.id)


@pytest.mark.asyncio
class TestMessageAuthorization:
    """Tests for sender/receiver assertions."""

    async def test_assert_user_is_sender(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept
        from tandem.errors import NotAllowedError, NotFoundError

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        await messaging.assert_user_is_sender("alice", draft.id)
        with pytest.raises(NotAllowedError, match="is not the sender of message"):
            await messaging.assert_user_is_sender("bob", draft.id)
        with pytest.raises(NotFoundError):
            await messaging.assert_user_is_sender("alice", str(ObjectId()))

    async def test_assert_sender_or_receiver(self, mock_db):
        from tandem.concepts.messaging import MessagingConcept, UserNotMatchError

        messaging = MessagingConcept(mock_db)
        draft = await messaging.draft("alice", "bob", "hi")

        await messaging.assert_sender_or_receiver("alice", draft.id)
        await messaging.assert_sender_or_receiver("bob", draft.id)
        with pytest.raises(UserNotMatchError):
            await messaging.assert_sender_or_receiver("carol", draft.id)
