"""Tests for DocCollection and the generic Concept base."""
import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ReturnDocument


class TestObjectId:
    """Tests for id parsing."""

    def test_valid_id(self):
        from tandem.concepts.base import object_id

        oid = ObjectId()
        assert object_id(str(oid)) == oid
        assert object_id(oid) is oid

    def test_invalid_id_is_none(self):
        from tandem.concepts.base import object_id

        assert object_id("not-an-id") is None
        assert object_id(None) is None


@pytest.mark.asyncio
class TestDocCollection:
    """Tests for the collection wrapper."""

    async def test_create_one_stamps_timestamps(self):
        """Test that inserts get created_at/updated_at and the new _id."""
        from tandem.concepts.base import DocCollection

        mock_db = MagicMock()
        mock_collection = AsyncMock()
        mock_db.__getitem__.return_value = mock_collection
        inserted_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        docs = DocCollection(mock_db, "posts")
        doc = await docs.create_one({"content": "hello"})

        assert doc["_id"] == inserted_id
        assert doc["content"] == "hello"
        assert doc["created_at"] == doc["updated_at"]
        mock_db.__getitem__.assert_called_with("posts")

    async def test_partial_update_builds_set_and_unset(self):
        """Test the update document sent to MongoDB."""
        from tandem.concepts.base import DocCollection

        mock_db = MagicMock()
        mock_collection = AsyncMock()
        mock_db.__getitem__.return_value = mock_collection
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId()}

        docs = DocCollection(mock_db, "messages")
        await docs.partial_update_one({"_id": 1}, {"state": "sent"}, unset=("drafted_at",))

        query, update = mock_collection.find_one_and_update.call_args[0]
        assert query == {"_id": 1}
        assert update["$set"]["state"] == "sent"
        assert "updated_at" in update["$set"]
        assert update["$unset"] == {"drafted_at": ""}
        assert mock_collection.find_one_and_update.call_args[1]["return_document"] == ReturnDocument.AFTER

    async def test_partial_update_without_unset(self):
        """Test that no $unset is sent when nothing is removed."""
        from tandem.concepts.base import DocCollection

        mock_db = MagicMock()
        mock_collection = AsyncMock()
        mock_db.__getitem__.return_value = mock_collection

        await DocCollection(mock_db, "items").partial_update_one({"_id": 1}, {"title": "x"})

        update = mock_collection.find_one_and_update.call_args[0][1]
        assert "$unset" not in update


@pytest.mark.asyncio
class TestConceptOwnership:
    """Tests for assert_owner_is_user, shared by every concept."""

    async def test_owner_matches(self, mock_db):
        from tandem.concepts.itemizing import ItemizingConcept

        items = ItemizingConcept(mock_db)
        item = await items.create("alice", "Title", "Description")

        await items.assert_owner_is_user(item.id, "alice")

    async def test_owner_mismatch_not_allowed(self, mock_db):
        from tandem.concepts.itemizing import ItemizingConcept
        from tandem.errors import NotAllowedError, OwnerNotMatchError

        items = ItemizingConcept(mock_db)
        item = await items.create("alice", "Title", "Description")

        with pytest.raises(NotAllowedError) as exc_info:
            await items.assert_owner_is_user(item.id, "bob")

        assert isinstance(exc_info.value, OwnerNotMatchError)
        assert "bob" in str(exc_info.value)
        assert item.id in str(exc_info.value)

    async def test_missing_record_not_found(self, mock_db):
        from tandem.concepts.posting import PostingConcept
        from tandem.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await PostingConcept(mock_db).assert_owner_is_user(str(ObjectId()), "alice")

    async def test_malformed_id_not_found(self, mock_db):
        from tandem.concepts.tracking import TrackingConcept
        from tandem.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await TrackingConcept(mock_db).assert_owner_is_user("garbage", "alice")


@pytest.mark.asyncio
class TestConceptCrud:
    """Tests for the read/update/delete contract."""

    async def test_read_missing_returns_none(self, mock_db):
        from tandem.concepts.posting import PostingConcept

        posting = PostingConcept(mock_db)

        assert await posting.read(str(ObjectId())) is None
        assert await posting.read("garbage") is None

    async def test_update_with_nothing_is_noop(self, mock_db):
        """Test that omitting every field only changes updated_at."""
        from tandem.concepts.posting import PostingConcept
        from tandem.models.post import PostOptions

        posting = PostingConcept(mock_db)
        post = await posting.create("alice", "hello", PostOptions(background_color="red"))

        updated = await posting.update(post.id)

        before = post.model_dump(exclude={"updated_at"})
        after = updated.model_dump(exclude={"updated_at"})
        assert before == after
        assert updated.updated_at >= post.updated_at

    async def test_update_missing_not_found(self, mock_db):
        from tandem.concepts.posting import PostingConcept
        from tandem.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await PostingConcept(mock_db).update(str(ObjectId()), content="x")

    async def test_delete_is_idempotent(self, mock_db):
        from tandem.concepts.posting import PostingConcept

        posting = PostingConcept(mock_db)
        post = await posting.create("alice", "hello")

        assert await posting.delete(post.id) == 1
        assert await posting.delete(post.id) == 0
        assert await posting.delete("garbage") == 0
