"""Pydantic models."""
from crackit.models.auth import (
    MessageResponse,
    PasswordResetRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from crackit.models.quizzes import (
    ExtractResponse,
    GenerateRequest,
    Question,
    QuestionsResponse,
    RegenerateRequest,
)
from crackit.models.reviews import ReviewCreate, ReviewSummary
from crackit.models.tests import (
    LookupItem,
    PlayResponse,
    ReviewItem,
    SortOrder,
    SubmitRequest,
    SubmitResponse,
    TestDetail,
    TestPublish,
    TestSummary,
    TestUpdate,
)

__all__ = [
    "ExtractResponse",
    "GenerateRequest",
    "LookupItem",
    "MessageResponse",
    "PasswordResetRequest",
    "PlayResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "Question",
    "QuestionsResponse",
    "RegenerateRequest",
    "ReviewCreate",
    "ReviewItem",
    "ReviewSummary",
    "SortOrder",
    "SubmitRequest",
    "SubmitResponse",
    "TestDetail",
    "TestPublish",
    "TestSummary",
    "TestUpdate",
    "TokenResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
