"""Profiling concept - at most one profile per user."""
from typing import Optional

from pymongo.errors import DuplicateKeyError

from tandem.concepts.base import Concept
from tandem.errors import NotAllowedError, NotFoundError
from tandem.models.profile import Profile


class ProfileExistsError(NotAllowedError):
    """The user already has a profile."""

    def __init__(self, user: str):
        self.user = user
        super().__init__(f"There already exists a profile for user {user}.")


class ProfileNotFoundError(NotFoundError):
    """The user has no profile."""

    def __init__(self, user: str):
        self.user = user
        super().__init__(f"There does not exist a profile for user {user}.")


class ProfilingConcept(Concept[Profile]):
    """Service for user profiles, keyed by user id rather than profile id."""

    model = Profile
    collection_name = "profiles"
    entity = "profile"

    async def create(
        self,
        user: str,
        name: str,
        contact: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> Profile:
        """
        Raises:
            ProfileExistsError: If the user already has a profile
        """
        await self.assert_profile_does_not_exist(user)
        try:
            doc = await self.docs.create_one({
                "user": user,
                "name": name,
                "contact": contact,
                "bio": bio,
            })
        except DuplicateKeyError:
            # Another request created the profile after the check above.
            raise ProfileExistsError(user)
        return self._doc_to_record(doc)

    async def view_profile(self, user: str) -> Optional[Profile]:
        doc = await self.docs.read_one({"user": user})
        return self._doc_to_record(doc) if doc else None

    async def update(
        self,
        user: str,
        name: Optional[str] = None,
        contact: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> Profile:
        """
        Update the user's profile. Omitted fields keep their value.

        Raises:
            ProfileNotFoundError: If the user has no profile
        """
        profile = await self.view_profile(user)
        if profile is None:
            raise ProfileNotFoundError(user)
        return await self._update(profile.id, {"name": name, "contact": contact, "bio": bio})

    async def delete(self, user: str) -> int:
        return await self.docs.delete_one({"user": user})

    async def assert_profile_exists(self, user: str) -> None:
        if await self.docs.read_one({"user": user}) is None:
            raise ProfileNotFoundError(user)

    async def assert_profile_does_not_exist(self, user: str) -> None:
        if await self.docs.read_one({"user": user}) is not None:
            raise ProfileExistsError(user)
