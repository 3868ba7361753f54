"""Generic document collection and the CRUD concept every entity builds on."""
from enum import Enum
from typing import Any, Generic, Iterable, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ReturnDocument

from tandem.errors import InvalidStatusError, NotFoundError, OwnerNotMatchError
from tandem.utils.dates import utcnow

RecordT = TypeVar("RecordT", bound=BaseModel)


def object_id(value: Any) -> Optional[ObjectId]:
    """
    Parse an id string into an ObjectId.

    Returns None for anything that is not a valid ObjectId, so lookups with
    a malformed id behave like lookups for a missing record.
    """
    if isinstance(value, ObjectId):
        return value
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class DocCollection:
    """
    Thin async wrapper over one MongoDB collection.

    Assigns ``created_at`` on insert and ``updated_at`` on every write.
    """

    def __init__(self, db, name: str):
        self.name = name
        self.collection = db[name]

    async def create_one(self, fields: dict) -> dict:
        """Insert a document and return it with its new ``_id``."""
        now = utcnow()
        doc = {**fields, "created_at": now, "updated_at": now}
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def read_one(self, query: dict) -> Optional[dict]:
        return await self.collection.find_one(query)

    async def read_many(
        self, query: dict, sort: Optional[list[tuple[str, int]]] = None
    ) -> list[dict]:
        cursor = self.collection.find(query, sort=sort)
        return await cursor.to_list(length=None)

    async def partial_update_one(
        self, query: dict, fields: dict, unset: Iterable[str] = ()
    ) -> Optional[dict]:
        """
        Set ``fields`` (and remove ``unset``) on the first match.

        Returns:
            The updated document, or None if nothing matched
        """
        update: dict = {"$set": {**fields, "updated_at": utcnow()}}
        unset = list(unset)
        if unset:
            update["$unset"] = {key: "" for key in unset}
        return await self.collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )

    async def delete_one(self, query: dict) -> int:
        result = await self.collection.delete_one(query)
        return result.deleted_count

    async def delete_many(self, query: dict) -> int:
        result = await self.collection.delete_many(query)
        return result.deleted_count

    async def pop_one(self, query: dict) -> Optional[dict]:
        """Delete the first match and return it."""
        return await self.collection.find_one_and_delete(query)


class Concept(Generic[RecordT]):
    """
    CRUD manager over one collection of records.

    Subclasses set:
        model: pydantic record model built from stored documents
        collection_name: default collection name
        entity: label used in error messages
        owner_field: document field holding the owning user's id
        owner_role: word used for the owner in error messages
        statuses: optional Enum of valid ``status`` values
    """

    model: type[RecordT]
    collection_name: str
    entity: str
    owner_field: str = "user"
    owner_role: str = "owner"
    statuses: Optional[type[Enum]] = None

    def __init__(self, db, collection_name: Optional[str] = None):
        """Initialize concept with database connection."""
        self.db = db
        self.docs = DocCollection(db, collection_name or self.collection_name)

    def _doc_to_record(self, doc: dict) -> RecordT:
        return self.model.model_validate({**doc, "_id": str(doc["_id"])})

    def _docs_to_records(self, docs: list[dict]) -> list[RecordT]:
        return [self._doc_to_record(doc) for doc in docs]

    def _not_found(self, record_id: str) -> NotFoundError:
        return NotFoundError(f"{self.entity.capitalize()} {record_id} does not exist!")

    async def _read_doc(self, record_id: str) -> Optional[dict]:
        oid = object_id(record_id)
        if oid is None:
            return None
        return await self.docs.read_one({"_id": oid})

    async def _require_doc(self, record_id: str) -> dict:
        doc = await self._read_doc(record_id)
        if doc is None:
            raise self._not_found(record_id)
        return doc

    async def read(self, record_id: str) -> Optional[RecordT]:
        """Get one record by id, or None if it does not exist."""
        doc = await self._read_doc(record_id)
        return self._doc_to_record(doc) if doc else None

    async def _update(
        self, record_id: str, fields: dict, unset: Iterable[str] = ()
    ) -> RecordT:
        """
        Apply a partial update.

        Fields whose value is None keep their stored value, so an update
        with everything omitted only touches ``updated_at``.

        Raises:
            NotFoundError: If the record does not exist
        """
        existing = await self._require_doc(record_id)
        changes = {key: value for key, value in fields.items() if value is not None}
        doc = await self.docs.partial_update_one({"_id": existing["_id"]}, changes, unset)
        if doc is None:
            raise self._not_found(record_id)
        return self._doc_to_record(doc)

    async def delete(self, record_id: str) -> int:
        """Delete a record by id. Deleting a missing record is not an error."""
        oid = object_id(record_id)
        if oid is None:
            return 0
        return await self.docs.delete_one({"_id": oid})

    async def assert_owner_is_user(self, record_id: str, user: str) -> None:
        """
        Check that ``user`` owns the record.

        Raises:
            NotFoundError: If the record does not exist
            OwnerNotMatchError: If the record belongs to someone else
        """
        doc = await self._require_doc(record_id)
        if str(doc[self.owner_field]) != str(user):
            raise OwnerNotMatchError(user, record_id, self.owner_role, self.entity)

    async def assert_valid_status(self, status: Optional[str]) -> None:
        """
        Check a status string against the declared statuses.

        None means "not provided" and passes.

        Raises:
            InvalidStatusError: If the status is not a declared value
        """
        if status is None or self.statuses is None:
            return
        value = status.value if isinstance(status, Enum) else status
        if value not in {member.value for member in self.statuses}:
            raise InvalidStatusError(status, self.entity)
