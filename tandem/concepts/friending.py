"""Friending concept - friend requests and symmetric friendships."""
import logging

from tandem.concepts.base import DocCollection
from tandem.errors import NotAllowedError, NotFoundError
from tandem.models.friend import FriendRequest, FriendRequestStatus, Friendship

logger = logging.getLogger(__name__)


class AlreadyFriendsError(NotAllowedError):
    def __init__(self, user1: str, user2: str):
        self.user1 = user1
        self.user2 = user2
        super().__init__(f"{user1} and {user2} are already friends!")


class FriendNotFoundError(NotFoundError):
    def __init__(self, user1: str, user2: str):
        self.user1 = user1
        self.user2 = user2
        super().__init__(f"Friendship between {user1} and {user2} does not exist!")


class FriendRequestAlreadyExistsError(NotAllowedError):
    def __init__(self, from_user: str, to_user: str):
        self.from_user = from_user
        self.to_user = to_user
        super().__init__(f"Friend request between {from_user} and {to_user} already exists!")


class FriendRequestNotFoundError(NotFoundError):
    def __init__(self, from_user: str, to_user: str):
        self.from_user = from_user
        self.to_user = to_user
        super().__init__(f"Friend request from {from_user} to {to_user} does not exist!")


def _between(user1: str, user2: str) -> dict:
    return {
        "$or": [
            {"user1": user1, "user2": user2},
            {"user1": user2, "user2": user1},
        ]
    }


class FriendingConcept:
    """
    Friend requests and friendships.

    Owns two collections: friendships (symmetric edges) and friend requests
    (directional, with a status).
    """

    def __init__(self, db, friends_collection: str = "friends", requests_collection: str = "friend_requests"):
        """Initialize concept with database connection."""
        self.db = db
        self.friends = DocCollection(db, friends_collection)
        self.requests = DocCollection(db, requests_collection)

    @staticmethod
    def _doc_to_request(doc: dict) -> FriendRequest:
        return FriendRequest.model_validate({**doc, "_id": str(doc["_id"])})

    async def get_requests(self, user: str) -> list[FriendRequest]:
        """Requests sent by or to ``user``, newest first."""
        docs = await self.requests.read_many(
            {"$or": [{"from_user": user}, {"to_user": user}]},
            sort=[("_id", -1)],
        )
        return [self._doc_to_request(doc) for doc in docs]

    async def send_request(self, from_user: str, to_user: str) -> FriendRequest:
        """
        Send a friend request.

        The duplicate check and the insert are separate steps; two requests
        racing each other can both get through.

        Raises:
            AlreadyFriendsError: If the users are already friends
            FriendRequestAlreadyExistsError: If a pending request exists in
                either direction
        """
        await self.assert_can_send_request(from_user, to_user)
        doc = await self.requests.create_one({
            "from_user": from_user,
            "to_user": to_user,
            "status": FriendRequestStatus.PENDING.value,
        })
        return self._doc_to_request(doc)

    async def accept_request(self, from_user: str, to_user: str) -> Friendship:
        """
        Accept a pending request and create the friendship.

        Raises:
            FriendRequestNotFoundError: If there is no pending request
        """
        await self._pop_pending_request(from_user, to_user)
        await self.requests.create_one({
            "from_user": from_user,
            "to_user": to_user,
            "status": FriendRequestStatus.ACCEPTED.value,
        })
        doc = await self.friends.create_one({"user1": from_user, "user2": to_user})
        logger.info("Users %s and %s are now friends", from_user, to_user)
        return Friendship.model_validate({**doc, "_id": str(doc["_id"])})

    async def reject_request(self, from_user: str, to_user: str) -> FriendRequest:
        """
        Reject a pending request.

        Raises:
            FriendRequestNotFoundError: If there is no pending request
        """
        await self._pop_pending_request(from_user, to_user)
        doc = await self.requests.create_one({
            "from_user": from_user,
            "to_user": to_user,
            "status": FriendRequestStatus.REJECTED.value,
        })
        return self._doc_to_request(doc)

    async def remove_request(self, from_user: str, to_user: str) -> None:
        """
        Cancel a pending request.

        Raises:
            FriendRequestNotFoundError: If there is no pending request
        """
        await self._pop_pending_request(from_user, to_user)

    async def remove_friend(self, user: str, friend: str) -> None:
        """
        Raises:
            FriendNotFoundError: If the users are not friends
        """
        friendship = await self.friends.pop_one(_between(user, friend))
        if friendship is None:
            raise FriendNotFoundError(user, friend)

    async def get_friends(self, user: str) -> list[str]:
        """Ids of the users ``user`` is friends with."""
        docs = await self.friends.read_many({"$or": [{"user1": user}, {"user2": user}]})
        return [doc["user2"] if doc["user1"] == user else doc["user1"] for doc in docs]

    async def assert_can_send_request(self, user1: str, user2: str) -> None:
        if await self.friends.read_one(_between(user1, user2)) is not None:
            raise AlreadyFriendsError(user1, user2)

        pending = await self.requests.read_one({
            "$or": [
                {"from_user": user1, "to_user": user2, "status": FriendRequestStatus.PENDING.value},
                {"from_user": user2, "to_user": user1, "status": FriendRequestStatus.PENDING.value},
            ]
        })
        if pending is not None:
            raise FriendRequestAlreadyExistsError(user1, user2)

    async def _pop_pending_request(self, from_user: str, to_user: str) -> dict:
        request = await self.requests.pop_one({
            "from_user": from_user,
            "to_user": to_user,
            "status": FriendRequestStatus.PENDING.value,
        })
        if request is None:
            raise FriendRequestNotFoundError(from_user, to_user)
        return request
