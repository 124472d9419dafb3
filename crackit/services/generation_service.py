"""Multiple-choice question generation via the Gemini API."""
from __future__ import annotations

import json
import logging
import re
import textwrap
from typing import Any

import requests

from crackit import config
from crackit.models.quizzes import OPTIONS_PER_QUESTION, Question
from crackit.utils.json_utils import json_dump

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*")


class QuizGenerationError(Exception):
    """Raised when questions cannot be generated or the reply is malformed."""


QUESTION_SHAPE = """{
  "question": "The question text",
  "options": ["Option A", "Option B", "Option C", "Option D"],
  "correctAnswer": 0
}"""


def build_generate_prompt(text: str, count: int) -> str:
    return textwrap.dedent(
        """\
        Generate {count} multiple choice questions based on the following text.
        Your response must be a valid JSON object with the following structure:
        {{
          "questions": [
        {shape}
          ]
        }}

        Important:
        - The correctAnswer field should be a number (0-3) representing the index of the correct answer in the options array
        - Return ONLY the JSON object, without any markdown formatting or additional text
        - Ensure the response is valid JSON that can be parsed directly

        Text to generate questions from:
        """
    ).format(count=count, shape=textwrap.indent(QUESTION_SHAPE, "    ")) + text


def build_regenerate_prompt(
    text: str,
    existing_questions: list[dict[str, Any]],
    question_index: int | None = None,
) -> str:
    existing = json_dump(existing_questions)
    if question_index is not None:
        head = textwrap.dedent(
            f"""\
            You are a test question generator. Given the following text and existing questions, generate a new multiple choice question to replace question {question_index + 1}.
            The new question should be different from the existing ones but cover similar concepts.
            The question should have 4 options and one correct answer.
            Format the question as a JSON object with the following structure:
            """
        )
        tail = "Return only the JSON object, without any markdown formatting or additional text."
    else:
        head = textwrap.dedent(
            f"""\
            You are a test question generator. Given the following text and existing questions, generate {len(existing_questions)} new multiple choice questions.
            The questions should be different from the existing ones but cover similar concepts.
            Each question should have 4 options and one correct answer.
            Format each question as a JSON object with the following structure:
            """
        )
        tail = "Return only a JSON array of these questions, without any markdown formatting or additional text."

    return (
        f"{head}{QUESTION_SHAPE}\n{tail}\n\n"
        f"Text:\n{text}\n\n"
        f"Existing Questions:\n{existing}"
    )


def clean_response(raw: str) -> str:
    """Strip markdown code fences the model sometimes wraps JSON in."""
    return _FENCE_RE.sub("", raw).strip()


def validate_questions(items: object) -> list[Question]:
    """Shallow-validate parsed model output into questions."""
    if not isinstance(items, list):
        raise QuizGenerationError("Invalid response format: expected an array of questions")

    questions = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise QuizGenerationError(f"Invalid question format at index {index}")
        text = item.get("question")
        options = item.get("options")
        correct = item.get("correctAnswer")
        if (
            not isinstance(text, str)
            or not text.strip()
            or not isinstance(options, list)
            or len(options) != OPTIONS_PER_QUESTION
            or not isinstance(correct, int)
            or isinstance(correct, bool)
            or not 0 <= correct < OPTIONS_PER_QUESTION
        ):
            raise QuizGenerationError(f"Invalid question format at index {index}")
        questions.append(
            Question(
                question=text.strip(),
                options=[str(option) for option in options],
                correct_answer=correct,
            )
        )
    return questions


def _require_api_key() -> str:
    if not config.GEMINI_API_KEY:
        raise QuizGenerationError("Gemini API key is not configured")
    return config.GEMINI_API_KEY


def _call_model(prompt: str) -> str:
    """Send a single prompt and return the reply text."""
    session = requests.Session()
    session.headers.update({"x-goog-api-key": _require_api_key()})

    response = session.post(
        f"{config.GEMINI_API_URL}/models/{config.GEMINI_MODEL}:generateContent",
        json={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
        timeout=config.REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    data = response.json()

    try:
        candidates = data.get("candidates") or []
        parts = candidates[0].get("content", {}).get("parts", []) if candidates else []
        reply = "".join(part.get("text", "") for part in parts)
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise QuizGenerationError("Unexpected response format from model") from exc

    if not reply:
        raise QuizGenerationError("Empty response from model")
    return reply


def _parse_reply(reply: str) -> object:
    try:
        return json.loads(clean_response(reply))
    except json.JSONDecodeError as exc:
        raise QuizGenerationError(f"Model returned invalid JSON: {exc.msg}") from exc


def generate_test(text: str, count: int | None = None) -> list[Question]:
    """Generate questions from study text."""
    _require_api_key()
    count = count or config.GENERATED_QUESTION_COUNT
    prompt = build_generate_prompt(text, count)
    try:
        parsed = _parse_reply(_call_model(prompt))
        # The prompt asks for {"questions": [...]}, a bare array is accepted too
        if isinstance(parsed, dict):
            parsed = parsed.get("questions")
        questions = validate_questions(parsed)
    except requests.RequestException as exc:
        log.error("Gemini request failed: %s", exc)
        raise QuizGenerationError(f"Failed to generate test: {exc}") from exc
    except QuizGenerationError as exc:
        log.warning("Test generation failed: %s", exc)
        raise QuizGenerationError(f"Failed to generate test: {exc}") from exc

    log.info("Generated %d questions from %d characters of text", len(questions), len(text))
    return questions


def regenerate_questions(
    text: str,
    existing_questions: list[Question],
    question_index: int | None = None,
) -> list[Question]:
    """Generate replacements for all existing questions, or for one of them.

    With question_index set, a single question is returned in a one-element list.
    """
    _require_api_key()
    existing = [question.to_payload() for question in existing_questions]
    prompt = build_regenerate_prompt(text, existing, question_index)
    try:
        parsed = _parse_reply(_call_model(prompt))
        if question_index is not None:
            parsed = [parsed]
        questions = validate_questions(parsed)
    except requests.RequestException as exc:
        log.error("Gemini request failed: %s", exc)
        raise QuizGenerationError(f"Failed to regenerate questions: {exc}") from exc
    except QuizGenerationError as exc:
        log.warning("Question regeneration failed: %s", exc)
        raise QuizGenerationError(f"Failed to regenerate questions: {exc}") from exc

    return questions
