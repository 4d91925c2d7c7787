import pytest

from feedback_core.app.errors import UnknownQuestion, ValidationError
from feedback_core.app.questions import normalize_questions
from feedback_core.app.schemas.form import Question, QuestionIn
from feedback_core.utils.base import UUID_LENGTH, QuestionType


def _q(**kwargs) -> QuestionIn:
    base = {"question_text": "How was it?", "question_type": "text"}
    base.update(kwargs)
    return QuestionIn(**base)


def test_assigns_ids_and_default_order() -> None:
    questions = normalize_questions(
        [_q(), _q(question_type="radio", options=["Yes", "No"])]
    )
    assert [q.order for q in questions] == [1, 2]
    assert all(len(q.id) == UUID_LENGTH for q in questions)
    assert questions[0].id != questions[1].id
    assert questions[1].question_type == QuestionType.RADIO


def test_ignores_client_ids_on_creation() -> None:
    questions = normalize_questions([_q(id="client-chosen")])
    assert questions[0].id != "client-chosen"


def test_keeps_known_ids_on_update() -> None:
    existing = normalize_questions([_q(), _q(question_text="Second")])
    updated = normalize_questions(
        [
            _q(id=existing[1].id, question_text="Second, reworded"),
            _q(question_text="Brand new"),
        ],
        existing=existing,
    )
    assert updated[0].id == existing[1].id
    assert updated[1].id not in {q.id for q in existing}


def test_rejects_unknown_id_on_update() -> None:
    existing = normalize_questions([_q()])
    with pytest.raises(UnknownQuestion):
        normalize_questions([_q(id="not-a-question-id")], existing=existing)


def test_rejects_empty_list() -> None:
    with pytest.raises(ValidationError):
        normalize_questions([])
    with pytest.raises(ValidationError):
        normalize_questions(None)


@pytest.mark.parametrize(
    "question",
    [
        {"question_text": "   "},
        {"question_type": None},
        {"question_type": "slider"},
        {"question_type": "radio", "options": ["Only one"]},
        {"question_type": "checkbox", "options": ["A", "  "]},
        {"order": -1},
    ],
)
def test_rejects_malformed_question(question: dict) -> None:
    with pytest.raises(ValidationError):
        normalize_questions([_q(**question)])


def test_rejects_duplicate_order() -> None:
    with pytest.raises(ValidationError):
        normalize_questions([_q(order=3), _q(order=3)])


def test_rejects_same_existing_id_twice() -> None:
    existing = normalize_questions([_q()])
    with pytest.raises(ValidationError):
        normalize_questions(
            [_q(id=existing[0].id), _q(id=existing[0].id)], existing=existing
        )


def test_strips_text_and_options() -> None:
    (question,) = normalize_questions(
        [_q(question_text="  Colour? ", question_type="checkbox", options=[" Red", "Blue ", ""])]
    )
    assert isinstance(question, Question)
    assert question.question_text == "Colour?"
    assert question.options == ["Red", "Blue"]
