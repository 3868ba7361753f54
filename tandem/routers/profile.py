"""Profile router - the current user's profile."""
from fastapi import APIRouter, Depends, status

from tandem.concepts.profiling import ProfilingConcept
from tandem.database import get_database
from tandem.models.profile import Profile, ProfileCreate, ProfileUpdate
from tandem.routers.auth import get_current_user_id

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Profile)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get the current user's profile. Returns 404 if there is none."""
    profiling = ProfilingConcept(db)
    await profiling.assert_profile_exists(user_id)
    return await profiling.view_profile(user_id)


@router.post("", response_model=Profile, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile: ProfileCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Create the current user's profile. Returns 403 if one exists."""
    return await ProfilingConcept(db).create(user_id, profile.name, profile.contact, profile.bio)


@router.patch("", response_model=Profile)
async def update_profile(
    update: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Update the current user's profile. Omitted fields are kept."""
    return await ProfilingConcept(db).update(user_id, update.name, update.contact, update.bio)


@router.delete("")
async def delete_profile(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete the current user's profile."""
    profiling = ProfilingConcept(db)
    await profiling.assert_profile_exists(user_id)
    await profiling.delete(user_id)
    return {"msg": "Profile deleted successfully!"}
