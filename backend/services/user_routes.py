"""HTTP routes for user profiles."""

from fastapi import APIRouter, Depends, HTTPException, status

from database.user_repository import (
    DuplicateEmailError,
    UserNotFoundError,
    UserRepository,
    get_user_repository,
)
from models.user_models import UserProfile, UserProfileCreate

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def register_user(
    profile: UserProfileCreate,
    users: UserRepository = Depends(get_user_repository),
) -> UserProfile:
    """Create a profile. Emails are unique; a failed request writes nothing."""
    try:
        return users.create(profile)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
) -> UserProfile:
    try:
        return users.get(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from e
