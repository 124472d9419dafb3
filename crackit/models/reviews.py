"""Pydantic models for reviews."""
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Request to review a test."""

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=5000)


class ReviewSummary(BaseModel):
    """Average rating and review count for a test."""

    average_rating: float | None
    review_count: int
