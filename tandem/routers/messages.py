"""Message router - drafting, sending, editing and deleting messages."""
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.concepts.messaging import MessagingConcept
from tandem.database import get_database
from tandem.errors import NotAllowedError, NotFoundError
from tandem.models.message import Message, MessageCreate, MessageState, MessageUpdate
from tandem.routers.auth import get_current_user_id

router = APIRouter(prefix="/messages", tags=["messages"])


class SendResponse(BaseModel):
    """Both records produced by sending a draft."""

    msg: str = "Message sent successfully!"
    sent_message: Message
    received_message: Message


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def write_message(
    message: MessageCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Draft a message to a user, addressed by username."""
    contact_id = (await AuthenticatingConcept(db).get_user_by_username(message.contact)).id
    return await MessagingConcept(db).draft(user_id, contact_id, message.text, message.attachment)


@router.get("/drafts", response_model=list[Message])
async def read_drafts(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    return await MessagingConcept(db).read_drafts(user_id)


@router.get("/sent", response_model=list[Message])
async def read_sent(
    contact: str = Query(..., description="Recipient username"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Messages the current user sent to ``contact``."""
    contact_id = (await AuthenticatingConcept(db).get_user_by_username(contact)).id
    return await MessagingConcept(db).read_sent(user_id, contact_id)


@router.get("/received", response_model=list[Message])
async def read_received(
    contact: str = Query(..., description="Sender username"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Messages the current user received from ``contact``."""
    contact_id = (await AuthenticatingConcept(db).get_user_by_username(contact)).id
    return await MessagingConcept(db).read_received(user_id, contact_id)


@router.patch("/send/{message_id}", response_model=SendResponse)
async def send_message(
    message_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Send a draft.

    - Only the sender may send it (403 otherwise)
    - Returns 403 if the message is not a draft
    """
    messaging = MessagingConcept(db)
    message = await messaging.read(message_id)
    if message is None:
        raise NotFoundError(f"Message with id {message_id} does not exist.")

    await messaging.assert_user_is_sender(user_id, message_id)
    sent, received = await messaging.send(message_id, user_id, message.recipient)
    return SendResponse(sent_message=sent, received_message=received)


@router.patch("", response_model=Message)
async def edit_message(
    update: MessageUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Edit a draft or a sent message.

    - Drafts: text, contact and attachment can change
    - Sent messages: text and attachment change on both copies; changing
      the contact is not allowed
    """
    messaging = MessagingConcept(db)
    message = await messaging.read(update.id)
    if message is None:
        raise NotFoundError(f"Message with ID {update.id} does not exist.")

    await messaging.assert_user_is_sender(user_id, update.id)

    if message.state == MessageState.SENT:
        if update.contact:
            raise NotAllowedError("Cannot edit the contact of a sent message.")
        return await messaging.edit_sent(update.id, update.text, update.attachment)

    contact_id = None
    if update.contact:
        contact_id = (await AuthenticatingConcept(db).get_user_by_username(update.contact)).id
    return await messaging.edit_draft(update.id, update.text, contact_id, update.attachment)


@router.delete("")
async def delete_message(
    message_id: str = Query(..., alias="id"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a draft, or a sent message together with its received copy.

    - Only the sender may delete; recipients get 403, including on their
      received copy
    """
    messaging = MessagingConcept(db)
    await messaging.assert_user_is_sender(user_id, message_id)

    message = await messaging.read(message_id)
    if message is None:
        raise NotFoundError(f"Message with ID {message_id} does not exist.")

    if message.state == MessageState.SENT:
        await messaging.delete_sent(message_id)
        return {"msg": "Sent message deleted successfully!"}

    await messaging.delete_draft(message_id)
    return {"msg": "Message draft deleted successfully!"}


@router.get("/{message_id}", response_model=Message)
async def read_message(
    message_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Read one message. Only its sender or recipient may read it."""
    messaging = MessagingConcept(db)
    await messaging.assert_sender_or_receiver(user_id, message_id)
    return await messaging.read(message_id)
