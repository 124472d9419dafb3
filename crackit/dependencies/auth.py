"""Session dependencies for FastAPI routes."""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.models.db.user import User
from crackit.services.auth_service import (
    extend_session,
    get_active_session,
    get_user_by_id,
    verify_token,
)

# HTTP Bearer scheme for JWT
security = HTTPBearer(auto_error=False)


class AuthError(Exception):
    """Why a bearer token did not resolve to a signed-in user."""


def resolve_user(
    credentials: HTTPAuthorizationCredentials | None, db: DbSession
) -> User:
    """Resolve bearer credentials to an active user.

    A valid token also slides its session's expiry forward.

    Raises:
        AuthError: with the reason the user could not be resolved.
    """
    if credentials is None:
        raise AuthError("Not authenticated")

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise AuthError("Invalid or expired token")

    jti = payload.get("jti")
    if jti:
        session = get_active_session(db, jti)
        if session is None:
            raise AuthError("Session expired or invalidated")
        extend_session(db, session)

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthError("Invalid token payload")

    user = get_user_by_id(db, int(user_id))
    if user is None:
        raise AuthError("User not found")
    if not user.is_active:
        raise AuthError("User is inactive")
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Get the signed-in user.

    Raises:
        HTTPException: 401 if not authenticated or token is invalid.
    """
    try:
        return resolve_user(credentials, db)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User | None:
    """Get the signed-in user, or None for anonymous visitors."""
    try:
        return resolve_user(credentials, db)
    except AuthError:
        return None
