"""Service layer for test reviews."""
import math

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession, joinedload

from crackit.models.db.review import Review


def list_reviews(db: DbSession, test_id: int) -> list[Review]:
    """List reviews for a test, oldest first."""
    stmt = (
        select(Review)
        .options(joinedload(Review.user))
        .where(Review.test_id == test_id)
        .order_by(Review.created_at, Review.id)
    )
    return list(db.execute(stmt).scalars().all())


def has_reviewed(db: DbSession, test_id: int, user_id: int) -> bool:
    """Check whether the user already reviewed the test."""
    stmt = select(Review.id).where(Review.test_id == test_id, Review.user_id == user_id)
    return db.execute(stmt).scalar_one_or_none() is not None


def add_review(
    db: DbSession, test_id: int, user_id: int, rating: int, comment: str
) -> Review:
    """Add a review. A user may review a test only once."""
    if not 1 <= rating <= 5:
        raise HTTPException(status_code=400, detail="Please select a rating")
    if has_reviewed(db, test_id, user_id):
        raise HTTPException(status_code=409, detail="You have already reviewed this test")

    review = Review(
        test_id=test_id,
        user_id=user_id,
        rating=rating,
        comment=comment.strip(),
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="You have already reviewed this test")
    db.refresh(review)
    return review


def average_rating(ratings: list[int]) -> float | None:
    """Mean rating rounded half-up to one decimal, None without ratings."""
    if not ratings:
        return None
    mean = sum(ratings) / len(ratings)
    return math.floor(mean * 10 + 0.5) / 10


def review_author_name(review: Review) -> str | None:
    """Name shown next to a review."""
    user = review.user
    if user is None:
        return None
    return user.display_name or f"{user.first_name} {user.last_name}".strip() or None
