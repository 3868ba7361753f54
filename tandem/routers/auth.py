"""Auth router - sessions, login/logout and account endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import BaseModel

from tandem.concepts.authenticating import AuthenticatingConcept
from tandem.concepts.sessioning import SessioningConcept
from tandem.database import get_database
from tandem.models.user import PasswordUpdate, User, UserCreate, UsernameUpdate
from tandem.utils.auth import create_access_token, verify_access_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])
security = HTTPBearer(auto_error=False)


class LoginRequest(BaseModel):
    """Login request model."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """Token response model."""

    msg: str = "Logged in!"
    access_token: str
    token_type: str = "bearer"


async def get_session_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Optional[str]:
    """
    Dependency to get the session ID from the bearer token, if any.

    Raises:
        HTTPException: If a token is present but invalid (401)
    """
    if credentials is None:
        return None

    try:
        return verify_access_token(credentials.credentials).session_id
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )


async def get_current_user_id(
    session_id: Optional[str] = Depends(get_session_id),
    db=Depends(get_database),
) -> str:
    """
    Dependency to get the logged-in user's ID.

    Raises:
        UnauthenticatedError: If there is no live session (401)
    """
    return await SessioningConcept(db).get_user(session_id)


@router.get("/session", response_model=User)
async def get_session_user(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get the user logged in to the current session."""
    return await AuthenticatingConcept(db).get_user_by_id(user_id)


@router.get("/users", response_model=list[User])
async def get_users(db=Depends(get_database)):
    """List all users."""
    return await AuthenticatingConcept(db).get_users()


@router.get("/users/{username}", response_model=User)
async def get_user(username: str, db=Depends(get_database)):
    """Look up a user by username."""
    return await AuthenticatingConcept(db).get_user_by_username(username)


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    session_id: Optional[str] = Depends(get_session_id),
    db=Depends(get_database),
):
    """
    Register a new user.

    - Must be logged out
    - Username must be unique, credentials non-empty
    """
    await SessioningConcept(db).is_logged_out(session_id)
    return await AuthenticatingConcept(db).create(user.username, user.password)


@router.patch("/users/username", response_model=User)
async def update_username(
    update: UsernameUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Change the current user's username."""
    return await AuthenticatingConcept(db).update_username(user_id, update.username)


@router.patch("/users/password", response_model=User)
async def update_password(
    update: PasswordUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Change the current user's password."""
    return await AuthenticatingConcept(db).update_password(
        user_id, update.current_password, update.new_password
    )


@router.delete("/users")
async def delete_user(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete the current user and end all of their sessions."""
    await SessioningConcept(db).end_all(user_id)
    await AuthenticatingConcept(db).delete(user_id)
    logger.info("Deleted user %s", user_id)
    return {"msg": "User deleted successfully!"}


@router.post("/login", response_model=TokenResponse)
async def log_in(
    login_req: LoginRequest,
    db=Depends(get_database),
):
    """
    Log in and return an access token bound to a new session.

    Raises:
        NotAllowedError: If the credentials are wrong (403)
    """
    user = await AuthenticatingConcept(db).authenticate(login_req.username, login_req.password)
    session_id = await SessioningConcept(db).start(user.id)
    return TokenResponse(access_token=create_access_token(user_id=user.id, session_id=session_id))


@router.post("/logout")
async def log_out(
    session_id: Optional[str] = Depends(get_session_id),
    db=Depends(get_database),
):
    """End the current session."""
    sessions = SessioningConcept(db)
    await sessions.get_user(session_id)
    await sessions.end(session_id)
    return {"msg": "Logged out!"}
