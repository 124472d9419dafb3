"""Saved (bookmarked) test endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.dependencies.auth import get_current_user
from crackit.models import MessageResponse, TestSummary
from crackit.models.db.user import User
from crackit.services import saved_service, test_service

router = APIRouter(prefix="/api", tags=["saved"])


@router.get("/saved-tests", response_model=list[TestSummary])
def list_saved_tests(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[TestSummary]:
    """Tests bookmarked by the current user."""
    tests = saved_service.list_saved_tests(db, current_user.id)
    return test_service.serialize_summaries(db, tests)


@router.post("/tests/{test_id}/save", response_model=MessageResponse)
def save_test(
    test_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    test_service.get_test(db, test_id)
    saved_service.save_test(db, current_user.id, test_id)
    return MessageResponse(message="Test saved")


@router.delete("/tests/{test_id}/save", response_model=MessageResponse)
def unsave_test(
    test_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    if not saved_service.unsave_test(db, current_user.id, test_id):
        raise HTTPException(status_code=404, detail="Test is not saved")
    return MessageResponse(message="Test removed from saved")
