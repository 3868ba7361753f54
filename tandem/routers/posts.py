"""Post router - API endpoints for posts."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tandem import responses
from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.concepts.posting import PostingConcept
from tandem.database import get_database
from tandem.models.post import Post, PostCreate, PostUpdate
from tandem.routers.auth import get_current_user_id

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[Post])
async def get_posts(
    author: Optional[str] = Query(None, description="Filter by author username"),
    db=Depends(get_database),
):
    """
    List posts, newest first.

    - Optional filter: author username
    - Authors are returned as usernames
    """
    authing = AuthenticatingConcept(db)
    posting = PostingConcept(db)
    if author:
        author_id = (await authing.get_user_by_username(author)).id
        posts = await posting.get_by_author(author_id)
    else:
        posts = await posting.get_posts()
    return await responses.posts(authing, posts)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    post: PostCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Create a post authored by the current user."""
    created = await PostingConcept(db).create(user_id, post.content, post.options)
    return await responses.post(AuthenticatingConcept(db), created)


@router.patch("/{post_id}", response_model=Post)
async def update_post(
    post_id: str,
    update: PostUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update a post.

    - Only the author may update it (403 otherwise)
    - Returns 404 if the post does not exist
    """
    posting = PostingConcept(db)
    await posting.assert_author_is_user(post_id, user_id)
    updated = await posting.update(post_id, update.content, update.options)
    return await responses.post(AuthenticatingConcept(db), updated)


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete a post. Only the author may delete it."""
    posting = PostingConcept(db)
    await posting.assert_author_is_user(post_id, user_id)
    await posting.delete(post_id)
    return {"msg": "Post deleted successfully!"}
