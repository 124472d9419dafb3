"""Authentication routes."""
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session as DbSession

from crackit.config import ACCESS_TOKEN_EXPIRE_MINUTES, SIGN_IN_REDIRECT
from crackit.database import get_db
from crackit.dependencies.auth import get_current_user, security
from crackit.models.auth import (
    MessageResponse,
    PasswordResetRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from crackit.models.db.user import User
from crackit.services.auth_service import (
    create_access_token,
    create_session,
    create_user,
    get_user_by_email,
    invalidate_session,
    update_password,
    verify_password,
    verify_token,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _issue_token(db: DbSession, user_id: int) -> TokenResponse:
    """Create a token and its backing session."""
    token, jti = create_access_token(user_id)
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    create_session(db, user_id, jti, expires_at)
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/sign-up", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    data: UserRegister,
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Register a new user."""
    if get_user_by_email(db, data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    return create_user(
        db,
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        university=data.university,
    )


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    data: UserLogin,
    db: Annotated[DbSession, Depends(get_db)],
) -> TokenResponse:
    """Sign in with email and password and get a JWT token."""
    user = get_user_by_email(db, data.email)

    if user is None or not verify_password(data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login credentials",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User is inactive",
        )

    response = _issue_token(db, user.id)
    response.redirect_to = SIGN_IN_REDIRECT
    response.has_completed_profile = user.has_completed_profile
    return response


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Sign out and invalidate current session."""
    if credentials is None:
        return MessageResponse(message="Already signed out")

    payload = verify_token(credentials.credentials)
    if payload and payload.get("jti"):
        invalidate_session(db, payload["jti"])

    return MessageResponse(message="Signed out successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user info."""
    return current_user


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> TokenResponse:
    """Rotate the access token and its session."""
    payload = verify_token(credentials.credentials) if credentials else None
    if payload and payload.get("jti"):
        invalidate_session(db, payload["jti"])

    return _issue_token(db, current_user.id)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: PasswordResetRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Change the signed-in user's password."""
    if data.password != data.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Passwords do not match",
        )

    update_password(db, current_user, data.password)
    return MessageResponse(message="Password updated")
