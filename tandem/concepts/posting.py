"""Posting concept - user posts."""
from typing import Optional

from tandem.concepts.base import Concept
from tandem.models.post import Post, PostOptions


class PostingConcept(Concept[Post]):
    """Service for handling post operations."""

    model = Post
    collection_name = "posts"
    entity = "post"
    owner_field = "author"
    owner_role = "author"

    async def create(
        self, author: str, content: str, options: Optional[PostOptions] = None
    ) -> Post:
        doc = await self.docs.create_one({
            "author": author,
            "content": content,
            "options": options.model_dump(exclude_none=True) if options else None,
        })
        return self._doc_to_record(doc)

    async def get_posts(self) -> list[Post]:
        """All posts, newest first."""
        docs = await self.docs.read_many({}, sort=[("_id", -1)])
        return self._docs_to_records(docs)

    async def get_by_author(self, author: str) -> list[Post]:
        docs = await self.docs.read_many({"author": author}, sort=[("_id", -1)])
        return self._docs_to_records(docs)

    async def update(
        self,
        post_id: str,
        content: Optional[str] = None,
        options: Optional[PostOptions] = None,
    ) -> Post:
        """
        Update a post. Omitted fields keep their value.

        Raises:
            NotFoundError: If the post does not exist
        """
        return await self._update(post_id, {
            "content": content,
            "options": options.model_dump(exclude_none=True) if options else None,
        })

    async def assert_author_is_user(self, post_id: str, user: str) -> None:
        await self.assert_owner_is_user(post_id, user)
