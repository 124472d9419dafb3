"""Test-related Pydantic models."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from crackit.models.quizzes import Question


class SortOrder(str, Enum):
    """Ordering of test listings by creation time."""

    NEWEST = "newest"
    OLDEST = "oldest"


class TestPublish(BaseModel):
    """Model for publishing a new test."""

    name: str = Field(..., min_length=1, max_length=255)
    university: str = Field(..., min_length=1, max_length=255)
    class_name: str = Field(..., min_length=1, max_length=255)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    questions: list[Question] = Field(..., min_length=1)

    @field_validator("name", "university", "class_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("All fields are required")
        return value


class TestUpdate(BaseModel):
    """Model for editing a test (owner only)."""

    questions: list[Question] = Field(..., min_length=1)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Test name cannot be empty")
        return value


class LookupItem(BaseModel):
    """Id/name pair for universities, classes and tags."""

    id: int
    name: str

    class Config:
        from_attributes = True


class ReviewItem(BaseModel):
    """Review as shown on a test page."""

    id: int
    rating: int
    comment: str
    created_at: datetime
    user_id: int
    author_name: str | None = None


class TestSummary(BaseModel):
    """Test card in listings and search results."""

    id: int
    name: str
    description: str | None
    user_id: int
    university: LookupItem
    class_: LookupItem = Field(..., alias="class")
    tags: list[LookupItem]
    question_count: int
    created_at: datetime

    class Config:
        populate_by_name = True


class TestDetail(TestSummary):
    """Full test with questions, reviews and viewer state."""

    questions: list[Question]
    reviews: list[ReviewItem]
    average_rating: float | None
    review_count: int
    is_owner: bool = False
    is_saved: bool = False
    has_reviewed: bool = False


class PlayQuestion(BaseModel):
    """Question as served for taking a test (answer withheld)."""

    index: int
    question: str
    options: list[str]


class PlayResponse(BaseModel):
    test_id: int
    name: str
    questions: list[PlayQuestion]


class AnswerSubmission(BaseModel):
    question_index: int = Field(..., ge=0)
    selected_option: int | None = Field(None, ge=0, le=3)


class SubmitRequest(BaseModel):
    answers: list[AnswerSubmission]


class QuestionResult(BaseModel):
    index: int
    selected_option: int | None
    correct_answer: int
    is_correct: bool


class SubmitResponse(BaseModel):
    """Graded attempt."""

    test_id: int
    score: int
    total: int
    percent: float
    results: list[QuestionResult]
