"""Question and quiz generation Pydantic models."""
from pydantic import BaseModel, Field, field_validator

OPTIONS_PER_QUESTION = 4


class Question(BaseModel):
    """A multiple-choice question with four options."""

    question: str = Field(..., min_length=1)
    options: list[str]
    correct_answer: int = Field(..., alias="correctAnswer", ge=0, le=OPTIONS_PER_QUESTION - 1)

    class Config:
        populate_by_name = True

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Question text is required")
        return value

    @field_validator("options")
    @classmethod
    def _four_options(cls, value: list[str]) -> list[str]:
        if len(value) != OPTIONS_PER_QUESTION:
            raise ValueError(f"A question must have exactly {OPTIONS_PER_QUESTION} options")
        return value

    def to_payload(self) -> dict[str, object]:
        """Stored JSON shape of the question."""
        return self.model_dump(by_alias=True)


class ExtractResponse(BaseModel):
    """Text extracted from an uploaded study file."""

    filename: str
    text: str
    length: int


class GenerateRequest(BaseModel):
    """Request to generate questions from study text."""

    text: str


class RegenerateRequest(BaseModel):
    """Request to regenerate all questions, or one when question_index is set."""

    text: str
    existing_questions: list[Question] = Field(..., min_length=1)
    question_index: int | None = Field(None, ge=0)


class QuestionsResponse(BaseModel):
    """Generated questions."""

    questions: list[Question]
