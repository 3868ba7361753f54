"""Item router - API endpoints for items."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.concepts.itemizing import ItemizingConcept
from tandem.database import get_database
from tandem.models.item import Item, ItemCreate, ItemUpdate
from tandem.routers.auth import get_current_user_id

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[Item])
async def get_items(
    creator: Optional[str] = Query(None, description="Filter by creator username"),
    db=Depends(get_database),
):
    """List items, optionally only those created by one user."""
    itemizing = ItemizingConcept(db)
    if creator:
        creator_id = (await AuthenticatingConcept(db).get_user_by_username(creator)).id
        return await itemizing.get_by_creator(creator_id)
    return await itemizing.get_items()


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(
    item: ItemCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create an item.

    - Starts "in-progress"
    - Returns 400 if title or description is empty
    """
    return await ItemizingConcept(db).create(user_id, item.title, item.description)


@router.patch("/{item_id}", response_model=Item)
async def update_item(
    item_id: str,
    update: ItemUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update an item.

    - Only the creator may update it (403 otherwise)
    - Returns 400 for an unknown status
    """
    itemizing = ItemizingConcept(db)
    await itemizing.assert_creator_is_user(item_id, user_id)
    await itemizing.assert_valid_status(update.status)
    return await itemizing.update(item_id, update.title, update.description, update.status)


@router.delete("/{item_id}")
async def delete_item(
    item_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete an item. Only the creator may delete it."""
    itemizing = ItemizingConcept(db)
    await itemizing.assert_creator_is_user(item_id, user_id)
    await itemizing.delete(item_id)
    return {"msg": "Item deleted successfully!"}
