"""Friend router - API endpoints for friends and friend requests."""
from fastapi import APIRouter, Depends

from tandem import responses
from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.concepts.friending import FriendingConcept
from tandem.database import get_database
from tandem.responses import FriendRequestView
from tandem.routers.auth import get_current_user_id

router = APIRouter(tags=["friends"])


@router.get("/friends", response_model=list[str])
async def get_friends(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Usernames of the current user's friends."""
    friend_ids = await FriendingConcept(db).get_friends(user_id)
    return await AuthenticatingConcept(db).ids_to_usernames(friend_ids)


@router.delete("/friends/{friend}")
async def remove_friend(
    friend: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Unfriend a user by username."""
    friend_id = (await AuthenticatingConcept(db).get_user_by_username(friend)).id
    await FriendingConcept(db).remove_friend(user_id, friend_id)
    return {"msg": "Unfriended!"}


@router.get("/friend/requests", response_model=list[FriendRequestView])
async def get_requests(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Friend requests sent by or to the current user."""
    requests = await FriendingConcept(db).get_requests(user_id)
    return await responses.friend_requests(AuthenticatingConcept(db), requests)


@router.post("/friend/requests/{to}")
async def send_friend_request(
    to: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Send a friend request to a user by username."""
    to_id = (await AuthenticatingConcept(db).get_user_by_username(to)).id
    await FriendingConcept(db).send_request(user_id, to_id)
    return {"msg": "Sent request!"}


@router.delete("/friend/requests/{to}")
async def remove_friend_request(
    to: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Cancel a pending request the current user sent."""
    to_id = (await AuthenticatingConcept(db).get_user_by_username(to)).id
    await FriendingConcept(db).remove_request(user_id, to_id)
    return {"msg": "Removed request!"}


@router.put("/friend/accept/{from_user}")
async def accept_friend_request(
    from_user: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Accept a pending request sent to the current user."""
    from_id = (await AuthenticatingConcept(db).get_user_by_username(from_user)).id
    await FriendingConcept(db).accept_request(from_id, user_id)
    return {"msg": "Accepted request!"}


@router.put("/friend/reject/{from_user}")
async def reject_friend_request(
    from_user: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Reject a pending request sent to the current user."""
    from_id = (await AuthenticatingConcept(db).get_user_by_username(from_user)).id
    await FriendingConcept(db).reject_request(from_id, user_id)
    return {"msg": "Rejected request!"}
