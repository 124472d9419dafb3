"""Test review endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.dependencies.auth import get_current_user
from crackit.models import ReviewCreate, ReviewItem, ReviewSummary
from crackit.models.db.review import Review
from crackit.models.db.user import User
from crackit.services import review_service, test_service

router = APIRouter(prefix="/api/tests/{test_id}", tags=["reviews"])


def _to_item(review: Review) -> ReviewItem:
    return ReviewItem(
        id=review.id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        user_id=review.user_id,
        author_name=review_service.review_author_name(review),
    )


@router.get("/reviews", response_model=list[ReviewItem])
def list_reviews(
    test_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[ReviewItem]:
    test_service.get_test(db, test_id)
    return [_to_item(review) for review in review_service.list_reviews(db, test_id)]


@router.post("/reviews", response_model=ReviewItem, status_code=status.HTTP_201_CREATED)
def create_review(
    test_id: int,
    payload: ReviewCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ReviewItem:
    """Rate and comment on a test. One review per user."""
    test_service.get_test(db, test_id)
    review = review_service.add_review(
        db, test_id, current_user.id, payload.rating, payload.comment
    )
    return _to_item(review)


@router.get("/rating", response_model=ReviewSummary)
def get_rating(
    test_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> ReviewSummary:
    """Average rating of a test."""
    test_service.get_test(db, test_id)
    ratings = [review.rating for review in review_service.list_reviews(db, test_id)]
    return ReviewSummary(
        average_rating=review_service.average_rating(ratings),
        review_count=len(ratings),
    )
