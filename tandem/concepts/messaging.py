"""Messaging concept - drafts, sent messages and their received copies."""
import logging
from typing import Optional

from tandem.concepts.base import Concept, object_id
from tandem.errors import NotAllowedError, NotFoundError, OwnerNotMatchError
from tandem.models.message import Message, MessageState, can_transition
from tandem.utils.dates import utcnow

logger = logging.getLogger(__name__)


class NotADraftError(NotAllowedError):
    """A draft-only operation was attempted on a non-draft message."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"The message {message_id} is not a draft!")


class MessageNotSentError(NotAllowedError):
    """A sent-only operation was attempted on a message that is not sent."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"The message {message_id} has not been sent!")


class UserNotMatchError(NotAllowedError):
    """The user is neither the sender nor the recipient of a message."""

    def __init__(self, user: str, message_id: str):
        self.user = user
        self.message_id = message_id
        super().__init__(f"{user} is not the sender or receiver of message {message_id}!")


class MessagingConcept(Concept[Message]):
    """
    Service for message operations.

    Sending a draft writes two records: a RECEIVED copy for the recipient
    and the original, moved to SENT. Edits and deletes of a sent message
    touch both. MongoDB transactions are not used; when the second write of
    a pair fails the first one is undone before the error propagates, but a
    crash between the two writes can still leave them out of step.
    """

    model = Message
    collection_name = "messages"
    entity = "message"
    owner_field = "sender"
    owner_role = "sender"

    async def draft(
        self,
        sender: str,
        recipient: str,
        text: str,
        attachment: Optional[str] = None,
    ) -> Message:
        doc = await self.docs.create_one({
            "sender": sender,
            "recipient": recipient,
            "text": text,
            "attachment": attachment,
            "state": MessageState.DRAFT.value,
            "drafted_at": utcnow(),
        })
        return self._doc_to_record(doc)

    async def read_drafts(self, sender: str) -> list[Message]:
        docs = await self.docs.read_many(
            {"sender": sender, "state": MessageState.DRAFT.value},
            sort=[("_id", -1)],
        )
        return self._docs_to_records(docs)

    async def read_sent(self, sender: str, recipient: str) -> list[Message]:
        docs = await self.docs.read_many(
            {"sender": sender, "recipient": recipient, "state": MessageState.SENT.value},
            sort=[("sent_at", -1)],
        )
        return self._docs_to_records(docs)

    async def read_received(self, recipient: str, sender: str) -> list[Message]:
        docs = await self.docs.read_many(
            {"sender": sender, "recipient": recipient, "state": MessageState.RECEIVED.value},
            sort=[("received_at", -1)],
        )
        return self._docs_to_records(docs)

    async def edit_draft(
        self,
        message_id: str,
        text: Optional[str] = None,
        recipient: Optional[str] = None,
        attachment: Optional[str] = None,
    ) -> Message:
        """
        Edit a draft. Omitted fields keep their value.

        Raises:
            NotFoundError: If the message does not exist
            NotADraftError: If the message is not a draft
        """
        doc = await self._require_doc(message_id)
        if doc["state"] != MessageState.DRAFT.value:
            raise NotADraftError(message_id)
        return await self._update(message_id, {
            "text": text,
            "recipient": recipient,
            "attachment": attachment,
        })

    async def delete_draft(self, message_id: str) -> int:
        """
        Delete a draft. Deleting a missing message is not an error.

        Raises:
            NotADraftError: If the message exists but is not a draft
        """
        doc = await self._read_doc(message_id)
        if doc is None:
            return 0
        if doc["state"] != MessageState.DRAFT.value:
            raise NotADraftError(message_id)
        return await self.docs.delete_one({"_id": doc["_id"]})

    async def send(self, message_id: str, sender: str, recipient: str) -> tuple[Message, Message]:
        """
        Send a draft.

        Creates the recipient's RECEIVED copy, then moves the draft to SENT,
        dropping ``drafted_at`` and linking the two records.

        Returns:
            The sent record and the received copy

        Raises:
            NotFoundError: If the message does not exist
            NotADraftError: If the message is not a draft
        """
        doc = await self._require_doc(message_id)
        if not can_transition(doc["state"], MessageState.SENT):
            raise NotADraftError(message_id)

        now = utcnow()
        received = await self.docs.create_one({
            "sender": sender,
            "recipient": recipient,
            "text": doc["text"],
            "attachment": doc.get("attachment"),
            "state": MessageState.RECEIVED.value,
            "received_at": now,
            "linked_message_id": message_id,
        })

        try:
            sent = await self.docs.partial_update_one(
                {"_id": doc["_id"], "state": MessageState.DRAFT.value},
                {
                    "state": MessageState.SENT.value,
                    "sent_at": now,
                    "linked_message_id": str(received["_id"]),
                },
                unset=("drafted_at",),
            )
        except Exception:
            await self.docs.delete_one({"_id": received["_id"]})
            raise

        if sent is None:
            # Sent or deleted by a concurrent request since we read it.
            await self.docs.delete_one({"_id": received["_id"]})
            raise NotADraftError(message_id)

        logger.info("Message %s sent from %s to %s", message_id, sender, recipient)
        return self._doc_to_record(sent), self._doc_to_record(received)

    async def edit_sent(
        self,
        message_id: str,
        text: Optional[str] = None,
        attachment: Optional[str] = None,
    ) -> Message:
        """
        Edit a sent message and its received copy.

        Raises:
            NotFoundError: If the message does not exist
            MessageNotSentError: If the message is not in the sent state
        """
        doc = await self._require_doc(message_id)
        if doc["state"] != MessageState.SENT.value:
            raise MessageNotSentError(message_id)

        changes = {
            key: value
            for key, value in {"text": text, "attachment": attachment}.items()
            if value is not None
        }
        previous = {key: doc.get(key) for key in changes}

        sent = await self.docs.partial_update_one({"_id": doc["_id"]}, changes)
        if sent is None:
            raise self._not_found(message_id)

        linked = object_id(doc.get("linked_message_id"))
        try:
            received = await self.docs.partial_update_one({"_id": linked}, changes) if linked else None
        except Exception:
            await self.docs.partial_update_one({"_id": doc["_id"]}, previous)
            raise

        if received is None:
            logger.warning("Sent message %s has no received copy to update", message_id)
        return self._doc_to_record(sent)

    async def delete_sent(self, message_id: str) -> int:
        """
        Delete a sent message together with its received copy.

        Returns:
            Number of records deleted

        Raises:
            MessageNotSentError: If the message exists but is not sent
        """
        doc = await self._read_doc(message_id)
        if doc is None:
            return 0
        if doc["state"] != MessageState.SENT.value:
            raise MessageNotSentError(message_id)

        deleted = await self.docs.delete_one({"_id": doc["_id"]})
        linked = object_id(doc.get("linked_message_id"))
        if linked is not None:
            deleted += await self.docs.delete_one({"_id": linked})
        return deleted

    async def assert_user_is_sender(self, user: str, message_id: str) -> None:
        """
        Raises:
            NotFoundError: If the message does not exist
            OwnerNotMatchError: If ``user`` did not send the message
        """
        doc = await self._read_doc(message_id)
        if doc is None:
            raise NotFoundError("This message does not exist.")
        if doc["sender"] != user:
            raise OwnerNotMatchError(user, message_id, self.owner_role, self.entity)

    async def assert_sender_or_receiver(self, user: str, message_id: str) -> None:
        """
        Raises:
            NotFoundError: If the message does not exist
            UserNotMatchError: If ``user`` neither sent nor received it
        """
        doc = await self._read_doc(message_id)
        if doc is None:
            raise NotFoundError("This message does not exist.")
        if user not in (doc["sender"], doc["recipient"]):
            raise UserNotMatchError(user, message_id)
