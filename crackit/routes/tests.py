"""Test publishing, browsing, taking and editing endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.dependencies.auth import get_current_user, get_optional_user
from crackit.models import (
    MessageResponse,
    PlayResponse,
    SortOrder,
    SubmitRequest,
    SubmitResponse,
    TestDetail,
    TestPublish,
    TestSummary,
    TestUpdate,
)
from crackit.models.db.user import User
from crackit.services import quiz_service, search_service, test_service

router = APIRouter(prefix="/api/tests", tags=["tests"])


@router.get("", response_model=list[TestSummary])
def list_tests(
    db: Annotated[DbSession, Depends(get_db)],
    q: str | None = Query(None, max_length=200),
    university_id: int | None = Query(None),
    class_id: int | None = Query(None),
    tag_id: int | None = Query(None),
    sort: SortOrder = Query(SortOrder.NEWEST),
) -> list[TestSummary]:
    """Browse published tests with optional filters."""
    tests = search_service.browse_tests(
        db,
        term=q,
        university_id=university_id,
        class_id=class_id,
        tag_id=tag_id,
        sort=sort,
    )
    return test_service.serialize_summaries(db, tests)


@router.post("", response_model=TestDetail, status_code=status.HTTP_201_CREATED)
def publish_test(
    payload: TestPublish,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> TestDetail:
    """Publish a generated test for others to take."""
    test = test_service.publish_test(
        db,
        current_user,
        name=payload.name,
        university=payload.university,
        class_name=payload.class_name,
        tags=payload.tags,
        questions=payload.questions,
        description=payload.description,
    )
    return test_service.serialize_detail(db, test, current_user)


@router.get("/{test_id}", response_model=TestDetail)
def get_test(
    test_id: int,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> TestDetail:
    """Get a test with its questions and reviews."""
    test = test_service.get_test(db, test_id)
    return test_service.serialize_detail(db, test, current_user)


@router.put("/{test_id}", response_model=TestDetail)
def update_test(
    test_id: int,
    update: TestUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> TestDetail:
    """Replace a test's questions (owner only)."""
    test = test_service.get_test(db, test_id)
    test_service.ensure_owner(test, current_user)
    test = test_service.update_test(
        db,
        test,
        questions=update.questions,
        name=update.name,
        description=update.description,
    )
    return test_service.serialize_detail(db, test, current_user)


@router.delete("/{test_id}", response_model=MessageResponse)
def delete_test(
    test_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a test (owner only)."""
    test = test_service.get_test(db, test_id)
    test_service.ensure_owner(test, current_user)
    test_service.delete_test(db, test)
    return MessageResponse(message="Test deleted")


@router.get("/{test_id}/play", response_model=PlayResponse)
def play_test(
    test_id: int,
    db: Annotated[DbSession, Depends(get_db)],
    shuffle: bool = Query(False),
    seed: int | None = Query(None),
) -> PlayResponse:
    """Questions for taking a test, answers withheld."""
    test = test_service.get_test(db, test_id)
    return PlayResponse(
        test_id=test.id,
        name=test.name,
        questions=quiz_service.play_questions(test.questions, shuffle=shuffle, seed=seed),
    )


@router.post("/{test_id}/submit", response_model=SubmitResponse)
def submit_test(
    test_id: int,
    payload: SubmitRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> SubmitResponse:
    """Grade a completed attempt."""
    test = test_service.get_test(db, test_id)
    questions = test.questions
    score, results = quiz_service.grade_answers(questions, payload.answers)
    return SubmitResponse(
        test_id=test.id,
        score=score,
        total=len(questions),
        percent=quiz_service.score_percent(score, len(questions)),
        results=results,
    )
