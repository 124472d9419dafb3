import json
from pathlib import Path

import pytest

import cli
from crackit.models.quizzes import Question
from crackit.services.generation_service import QuizGenerationError

from conftest import SAMPLE_QUESTIONS


def test_cli_writes_generated_questions(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("Cells and organelles", encoding="utf-8")
    output = tmp_path / "out" / "quiz.json"
    seen = {}

    def fake_generate(text: str) -> list[Question]:
        seen["text"] = text
        return [Question.model_validate(q) for q in SAMPLE_QUESTIONS]

    monkeypatch.setattr(cli, "generate_test", fake_generate)

    assert cli.main([str(source), "--output", str(output)]) == 0
    assert seen["text"] == "Cells and organelles"
    assert json.loads(output.read_text(encoding="utf-8")) == {"questions": SAMPLE_QUESTIONS}


def test_cli_reports_failures(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("Cells", encoding="utf-8")

    def failing_generate(text: str) -> list[Question]:
        raise QuizGenerationError("Gemini API key is not configured")

    monkeypatch.setattr(cli, "generate_test", failing_generate)
    assert cli.main([str(source), "--output", str(tmp_path / "quiz.json")]) == 1
    assert not (tmp_path / "quiz.json").exists()


def test_cli_rejects_unsupported_file(tmp_path: Path) -> None:
    source = tmp_path / "image.png"
    source.write_bytes(b"\x89PNG")
    assert cli.main([str(source)]) == 1
