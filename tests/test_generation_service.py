import json

import pytest

from crackit import config
from crackit.models.quizzes import Question
from crackit.services import generation_service
from crackit.services.generation_service import QuizGenerationError

from fakes import FakeResponse, FakeSession, gemini_reply

QUESTIONS = [
    {"question": "2 + 2?", "options": ["3", "4", "5", "6"], "correctAnswer": 1},
    {"question": "Capital of France?", "options": ["Rome", "Madrid", "Paris", "Oslo"], "correctAnswer": 2},
]


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "GEMINI_API_KEY", "test-key")


def _install(monkeypatch: pytest.MonkeyPatch, *responses: FakeResponse) -> FakeSession:
    session = FakeSession(list(responses))
    monkeypatch.setattr(generation_service.requests, "Session", session)
    return session


def test_clean_response_strips_fences() -> None:
    raw = '```json\n{"questions": []}\n```'
    assert generation_service.clean_response(raw) == '{"questions": []}'


def test_validate_questions_rejects_non_list() -> None:
    with pytest.raises(QuizGenerationError, match="expected an array of questions"):
        generation_service.validate_questions({"question": "x"})


@pytest.mark.parametrize(
    "item",
    [
        {"question": "Q", "options": ["a", "b", "c"], "correctAnswer": 0},
        {"question": "Q", "options": ["a", "b", "c", "d"], "correctAnswer": 4},
        {"question": "Q", "options": ["a", "b", "c", "d"], "correctAnswer": "1"},
        {"question": "Q", "options": ["a", "b", "c", "d"], "correctAnswer": True},
        {"question": "  ", "options": ["a", "b", "c", "d"], "correctAnswer": 0},
        "not a question",
    ],
)
def test_validate_questions_reports_index(item: object) -> None:
    with pytest.raises(QuizGenerationError, match="Invalid question format at index 1"):
        generation_service.validate_questions([QUESTIONS[0], item])


def test_generate_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "GEMINI_API_KEY", "")
    with pytest.raises(QuizGenerationError, match="Gemini API key is not configured"):
        generation_service.generate_test("some text")


def test_generate_parses_fenced_object(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    reply = "```json\n" + json.dumps({"questions": QUESTIONS}) + "\n```"
    session = _install(monkeypatch, gemini_reply(reply))

    questions = generation_service.generate_test("Arithmetic and geography notes")

    assert [q.correct_answer for q in questions] == [1, 2]
    call = session.calls[0]
    assert call["url"].endswith(f"/models/{config.GEMINI_MODEL}:generateContent")
    prompt = call["json"]["contents"][0]["parts"][0]["text"]
    assert f"Generate {config.GENERATED_QUESTION_COUNT} multiple choice questions" in prompt
    assert prompt.endswith("Arithmetic and geography notes")
    assert session.headers["x-goog-api-key"] == "test-key"


def test_generate_accepts_bare_array(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, gemini_reply(json.dumps(QUESTIONS)))
    assert len(generation_service.generate_test("text")) == 2


def test_generate_wraps_invalid_json(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, gemini_reply("Sure! Here are your questions."))
    with pytest.raises(QuizGenerationError, match="^Failed to generate test: "):
        generation_service.generate_test("text")


def test_generate_wraps_http_error(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, FakeResponse({}, status_code=500))
    with pytest.raises(QuizGenerationError, match="^Failed to generate test: "):
        generation_service.generate_test("text")


def test_generate_empty_reply(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, FakeResponse({"candidates": []}))
    with pytest.raises(QuizGenerationError, match="Empty response from model"):
        generation_service.generate_test("text")


def test_regenerate_single_question(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    replacement = {"question": "3 + 3?", "options": ["5", "6", "7", "8"], "correctAnswer": 1}
    session = _install(monkeypatch, gemini_reply(json.dumps(replacement)))
    existing = [Question.model_validate(q) for q in QUESTIONS]

    questions = generation_service.regenerate_questions("text", existing, question_index=0)

    assert len(questions) == 1
    assert questions[0].question == "3 + 3?"
    prompt = session.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "replace question 1" in prompt
    assert '"correctAnswer": 2' in prompt


def test_regenerate_all_questions(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    session = _install(monkeypatch, gemini_reply(json.dumps(QUESTIONS)))
    existing = [Question.model_validate(q) for q in QUESTIONS]

    questions = generation_service.regenerate_questions("text", existing)

    assert len(questions) == 2
    prompt = session.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "generate 2 new multiple choice questions" in prompt


def test_regenerate_wraps_request_error(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, FakeResponse({}, status_code=503))
    existing = [Question.model_validate(q) for q in QUESTIONS]
    with pytest.raises(QuizGenerationError, match="^Failed to regenerate questions: "):
        generation_service.regenerate_questions("text", existing)


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        {"candidates": ["oops"]},
        {"candidates": [{"content": {"parts": ["plain text"]}}]},
    ],
)
def test_generate_unexpected_reply_shape(
    monkeypatch: pytest.MonkeyPatch, api_key, payload: object
) -> None:
    _install(monkeypatch, FakeResponse(payload))
    with pytest.raises(QuizGenerationError, match="^Failed to generate test: Unexpected response format"):
        generation_service.generate_test("text")


def test_regenerate_prefixes_invalid_reply(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, gemini_reply("not json at all"))
    existing = [Question.model_validate(q) for q in QUESTIONS]
    with pytest.raises(QuizGenerationError, match="^Failed to regenerate questions: Model returned invalid JSON"):
        generation_service.regenerate_questions("text", existing)


def test_regenerate_prefixes_validation_error(monkeypatch: pytest.MonkeyPatch, api_key) -> None:
    _install(monkeypatch, gemini_reply(json.dumps({"question": "Q", "options": []})))
    existing = [Question.model_validate(q) for q in QUESTIONS]
    with pytest.raises(
        QuizGenerationError,
        match="^Failed to regenerate questions: Invalid question format at index 0",
    ):
        generation_service.regenerate_questions("text", existing, question_index=0)
