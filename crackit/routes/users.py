"""User profile routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.dependencies.auth import get_current_user
from crackit.models.auth import ProfileResponse, ProfileUpdateRequest
from crackit.models.db.user import User
from crackit.services.auth_service import update_university_info

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user's profile."""
    return current_user


@router.patch("/me/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Update university info and complete the profile."""
    university = data.university.strip()
    level = data.level.strip()
    if not university or not level:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="All fields are required",
        )

    display_name = data.display_name.strip() if data.display_name is not None else None
    return update_university_info(db, current_user, university, level, display_name)
