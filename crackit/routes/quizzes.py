"""Quiz creation endpoints: study material upload and question generation."""
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from crackit.config import UPLOAD_MAX_BYTES
from crackit.dependencies.auth import get_current_user
from crackit.models.db.user import User
from crackit.models.quizzes import (
    ExtractResponse,
    GenerateRequest,
    QuestionsResponse,
    RegenerateRequest,
)
from crackit.services.conversion_service import FileConversionError, convert_file_to_text
from crackit.services.generation_service import (
    QuizGenerationError,
    generate_test,
    regenerate_questions,
)

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


def _require_text(text: str) -> str:
    cleaned = text.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail="Study text is required")
    return cleaned


@router.post("/extract", response_model=ExtractResponse)
def extract_text(
    current_user: Annotated[User, Depends(get_current_user)],
    file: UploadFile = File(...),
) -> ExtractResponse:
    """Convert an uploaded PDF, PPTX or DOCX file to plain text."""
    data = file.file.read(UPLOAD_MAX_BYTES + 1)
    if len(data) > UPLOAD_MAX_BYTES:
        raise HTTPException(status_code=413, detail="File is too large")

    file_name = Path(file.filename or "").name
    try:
        text = convert_file_to_text(file_name, file.content_type, data)
    except FileConversionError as exc:
        raise HTTPException(status_code=502 if exc.upstream else 400, detail=str(exc))

    return ExtractResponse(filename=file_name, text=text, length=len(text))


@router.post("/generate", response_model=QuestionsResponse)
def generate(
    payload: GenerateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
) -> QuestionsResponse:
    """Generate multiple-choice questions from study text."""
    text = _require_text(payload.text)
    try:
        questions = generate_test(text)
    except QuizGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return QuestionsResponse(questions=questions)


@router.post("/regenerate", response_model=QuestionsResponse)
def regenerate(
    payload: RegenerateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
) -> QuestionsResponse:
    """Regenerate every question, or only the one at question_index."""
    text = _require_text(payload.text)
    index = payload.question_index
    if index is not None and index >= len(payload.existing_questions):
        raise HTTPException(status_code=400, detail="Question index out of range")

    try:
        questions = regenerate_questions(text, payload.existing_questions, index)
    except QuizGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return QuestionsResponse(questions=questions)
