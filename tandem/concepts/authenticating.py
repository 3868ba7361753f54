"""Authenticating concept - usernames and password hashes."""
import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError

from tandem.concepts.base import Concept, object_id
from tandem.errors import BadValuesError, NotAllowedError, NotFoundError
from tandem.models.user import User, UserInDB
from tandem.utils.auth import hash_password, verify_password

logger = logging.getLogger(__name__)

DELETED_USER = "DELETED_USER"


class UsernameTakenError(NotAllowedError):
    """Another user already has this username."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User with username {username} already exists!")


class AuthenticatingConcept(Concept[User]):
    """Service for registering users and checking their credentials."""

    model = User
    collection_name = "users"
    entity = "user"

    async def create(self, username: str, password: str) -> User:
        """
        Register a new user.

        Args:
            username: Unique username
            password: Plain text password

        Returns:
            User object (without password)

        Raises:
            BadValuesError: If username or password is empty
            NotAllowedError: If the username is taken
        """
        self.assert_good_credentials(username, password)
        await self.assert_username_unique(username)

        try:
            doc = await self.docs.create_one({
                "username": username,
                "hashed_password": hash_password(password),
            })
        except DuplicateKeyError:
            raise UsernameTakenError(username)
        logger.info("Registered user %s", username)
        return self._doc_to_record(doc)

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Raises:
            NotFoundError: If no user has this id
        """
        user = await self.read(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} does not exist!")
        return user

    async def get_user_by_username(self, username: str) -> User:
        """
        Raises:
            NotFoundError: If no user has this username
        """
        doc = await self.docs.read_one({"username": username})
        if doc is None:
            raise NotFoundError(f"User with username {username} does not exist!")
        return self._doc_to_record(doc)

    async def get_users(self, username: Optional[str] = None) -> list[User]:
        """List users, optionally only the one with ``username``."""
        query = {"username": username} if username else {}
        docs = await self.docs.read_many(query, sort=[("username", 1)])
        return self._docs_to_records(docs)

    async def ids_to_usernames(self, ids: list[str]) -> list[str]:
        """
        Map user ids to usernames, keeping order.

        Ids that no longer resolve map to ``DELETED_USER``.
        """
        oids = [oid for oid in (object_id(i) for i in ids) if oid is not None]
        docs = await self.docs.read_many({"_id": {"$in": oids}})
        names = {str(doc["_id"]): doc["username"] for doc in docs}
        return [names.get(str(i), DELETED_USER) for i in ids]

    async def authenticate(self, username: str, password: str) -> User:
        """
        Check a username and password.

        Raises:
            NotAllowedError: If the credentials do not match
        """
        doc = await self.docs.read_one({"username": username})
        if not doc or not verify_password(password, doc["hashed_password"]):
            raise NotAllowedError("Username or password is incorrect.")
        return self._doc_to_record(doc)

    async def update_username(self, user_id: str, username: str) -> User:
        """
        Raises:
            BadValuesError: If the username is empty
            NotAllowedError: If the username is taken
            NotFoundError: If the user does not exist
        """
        if not username:
            raise BadValuesError("Username must be non-empty!")
        await self.assert_username_unique(username)
        try:
            return await self._update(user_id, {"username": username})
        except DuplicateKeyError:
            raise UsernameTakenError(username)

    async def update_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> User:
        """
        Raises:
            NotFoundError: If the user does not exist
            NotAllowedError: If ``current_password`` is wrong
            BadValuesError: If the new password is empty
        """
        doc = await self._require_doc(user_id)
        user = UserInDB.model_validate({**doc, "_id": str(doc["_id"])})
        if not verify_password(current_password, user.hashed_password):
            raise NotAllowedError("The given current password is wrong!")
        if not new_password:
            raise BadValuesError("Password must be non-empty!")
        return await self._update(user_id, {"hashed_password": hash_password(new_password)})

    def assert_good_credentials(self, username: str, password: str) -> None:
        if not username or not password:
            raise BadValuesError("Username and password must be non-empty!")

    async def assert_username_unique(self, username: str) -> None:
        if await self.docs.read_one({"username": username}):
            raise UsernameTakenError(username)
