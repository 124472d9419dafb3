from crackit.models.tests import AnswerSubmission
from crackit.services import quiz_service

from conftest import SAMPLE_QUESTIONS


def test_play_questions_keep_stored_index() -> None:
    items = quiz_service.play_questions(SAMPLE_QUESTIONS)
    assert [item.index for item in items] == [0, 1, 2]
    assert items[0].options == SAMPLE_QUESTIONS[0]["options"]


def test_shuffle_is_seeded() -> None:
    first = quiz_service.play_questions(SAMPLE_QUESTIONS, shuffle=True, seed=3)
    second = quiz_service.play_questions(SAMPLE_QUESTIONS, shuffle=True, seed=3)
    assert [q.index for q in first] == [q.index for q in second]
    assert sorted(q.index for q in first) == [0, 1, 2]


def test_grade_answers_last_answer_wins_and_unknown_ignored() -> None:
    answers = [
        AnswerSubmission(question_index=0, selected_option=0),
        AnswerSubmission(question_index=0, selected_option=1),
        AnswerSubmission(question_index=2, selected_option=2),
        AnswerSubmission(question_index=9, selected_option=0),
    ]
    score, results = quiz_service.grade_answers(SAMPLE_QUESTIONS, answers)
    assert score == 2
    assert [r.is_correct for r in results] == [True, False, True]
    assert results[1].selected_option is None
    assert results[1].correct_answer == 0


def test_score_percent() -> None:
    assert quiz_service.score_percent(0, 0) == 0.0
    assert quiz_service.score_percent(2, 3) == 66.7
    assert quiz_service.score_percent(3, 3) == 100.0
