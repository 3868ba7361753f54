"""Goal router - API endpoints for goal tracking."""
from fastapi import APIRouter, Depends, status

from tandem.concepts.tracking import TrackingConcept
from tandem.database import get_database
from tandem.models.goal import Goal, GoalCreate, GoalStatus, GoalUpdate
from tandem.routers.auth import get_current_user_id

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a goal for the current user.

    - Starts "pending", or "past due" if the due date has passed
    """
    return await TrackingConcept(db).create(user_id, goal.title, goal.due, goal.description)


@router.get("", response_model=list[Goal])
async def get_goals(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """All of the current user's goals, soonest due first."""
    return await TrackingConcept(db).view_goals(user_id)


@router.get("/pending", response_model=list[Goal])
async def get_pending(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    return await TrackingConcept(db).view_status(user_id, GoalStatus.PENDING.value)


@router.get("/complete", response_model=list[Goal])
async def get_complete(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    return await TrackingConcept(db).view_status(user_id, GoalStatus.COMPLETE.value)


@router.get("/pastdue", response_model=list[Goal])
async def get_past_due(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    return await TrackingConcept(db).view_status(user_id, GoalStatus.PAST_DUE.value)


@router.post("/statuses/refresh")
async def refresh_goal_statuses(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Run the past-due sweep over every pending goal.

    - Requires authentication
    - Goals are not reclassified on read; this (or the cron script) does it
    """
    updated = await TrackingConcept(db).update_goal_statuses()
    return {"msg": "The goal statuses have been updated based on the current date.", "updated": updated}


@router.patch("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    update: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update a goal.

    - Only the executor may update it (403 otherwise)
    - Returns 400 for an unknown status, 404 if the goal does not exist
    """
    tracking = TrackingConcept(db)
    await tracking.assert_executor_is_user(goal_id, user_id)
    return await tracking.edit(goal_id, update.title, update.description, update.status, update.due)


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete a goal. Only the executor may delete it."""
    tracking = TrackingConcept(db)
    await tracking.assert_executor_is_user(goal_id, user_id)
    await tracking.delete(goal_id)
    return {"msg": "Goal deleted successfully!"}
