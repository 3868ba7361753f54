"""Response shaping: swap stored user ids for usernames."""
from pydantic import BaseModel

from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.models.friend import FriendRequest, FriendRequestStatus
from tandem.models.post import Post


class FriendRequestView(BaseModel):
    """Friend request as returned by the API."""

    from_user: str
    to_user: str
    status: FriendRequestStatus


async def posts(authing: AuthenticatingConcept, records: list[Post]) -> list[Post]:
    """Replace each post's author id with the author's username."""
    authors = await authing.ids_to_usernames([post.author for post in records])
    return [post.model_copy(update={"author": author}) for post, author in zip(records, authors)]


async def post(authing: AuthenticatingConcept, record: Post) -> Post:
    return (await posts(authing, [record]))[0]


async def friend_requests(
    authing: AuthenticatingConcept, records: list[FriendRequest]
) -> list[FriendRequestView]:
    """Replace the from/to ids of each request with usernames."""
    senders = await authing.ids_to_usernames([request.from_user for request in records])
    recipients = await authing.ids_to_usernames([request.to_user for request in records])
    return [
        FriendRequestView(from_user=sender, to_user=recipient, status=request.status)
        for request, sender, recipient in zip(records, senders, recipients)
    ]
