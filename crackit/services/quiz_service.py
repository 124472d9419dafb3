"""Taking a test: question ordering and grading."""
import random
from typing import Any

from crackit.models.tests import AnswerSubmission, PlayQuestion, QuestionResult


def play_questions(
    questions: list[dict[str, Any]],
    shuffle: bool = False,
    seed: int | None = None,
) -> list[PlayQuestion]:
    """Questions to present, without answers, optionally in shuffled order.

    Each item keeps the index of the question in the stored test so that
    answers can be graded regardless of presentation order.
    """
    items = [
        PlayQuestion(index=index, question=q["question"], options=list(q["options"]))
        for index, q in enumerate(questions)
    ]
    if shuffle:
        random.Random(seed).shuffle(items)
    return items


def grade_answers(
    questions: list[dict[str, Any]],
    answers: list[AnswerSubmission],
) -> tuple[int, list[QuestionResult]]:
    """Grade submitted answers against the stored questions.

    Unanswered questions count as wrong; answers referring to unknown
    question indexes are ignored. The last answer for a question wins.
    """
    selected: dict[int, int | None] = {}
    for answer in answers:
        if 0 <= answer.question_index < len(questions):
            selected[answer.question_index] = answer.selected_option

    score = 0
    results = []
    for index, question in enumerate(questions):
        choice = selected.get(index)
        correct_answer = int(question["correctAnswer"])
        is_correct = choice is not None and choice == correct_answer
        if is_correct:
            score += 1
        results.append(
            QuestionResult(
                index=index,
                selected_option=choice,
                correct_answer=correct_answer,
                is_correct=is_correct,
            )
        )
    return score, results


def score_percent(score: int, total: int) -> float:
    """Calculate percentage of correct answers."""
    if total == 0:
        return 0.0
    return round(score / total * 100, 1)
