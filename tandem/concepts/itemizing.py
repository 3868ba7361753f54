"""Itemizing concept - a user's items (tasks)."""
from typing import Optional

from tandem.concepts.base import Concept
from tandem.errors import BadValuesError
from tandem.models.item import Item, ItemStatus


class ItemizingConcept(Concept[Item]):
    """Service for handling item operations."""

    model = Item
    collection_name = "items"
    entity = "item"
    owner_field = "creator"
    owner_role = "creator"
    statuses = ItemStatus

    async def create(
        self,
        creator: str,
        title: str,
        description: str,
        status: str = ItemStatus.IN_PROGRESS.value,
    ) -> Item:
        """
        Create an item.

        Raises:
            BadValuesError: If title or description is empty, or the
                status is unknown
        """
        await self.assert_valid_item_details(title, description)
        await self.assert_valid_status(status)

        doc = await self.docs.create_one({
            "creator": creator,
            "title": title,
            "description": description,
            "status": ItemStatus(status).value,
        })
        return self._doc_to_record(doc)

    async def get_items(self) -> list[Item]:
        """All items, newest first."""
        docs = await self.docs.read_many({}, sort=[("_id", -1)])
        return self._docs_to_records(docs)

    async def get_by_creator(self, creator: str) -> list[Item]:
        docs = await self.docs.read_many({"creator": creator})
        return self._docs_to_records(docs)

    async def update(
        self,
        item_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Item:
        """
        Update an item. Omitted fields keep their value.

        Raises:
            BadValuesError: If the status is unknown
            NotFoundError: If the item does not exist
        """
        await self.assert_valid_status(status)
        return await self._update(item_id, {
            "title": title,
            "description": description,
            "status": ItemStatus(status).value if status is not None else None,
        })

    async def assert_creator_is_user(self, item_id: str, user: str) -> None:
        await self.assert_owner_is_user(item_id, user)

    async def assert_valid_item_details(self, title: str, description: str) -> None:
        if not title or not description:
            raise BadValuesError("Title and description must be non-empty!")
