import datetime
import math
from typing import Dict, List, Optional, Sequence, Set, Union

from feedback_core.app.errors import (
    InvalidAnswer,
    MissingRequiredAnswer,
    UnknownQuestion,
    ValidationError,
)
from feedback_core.app.schemas.feedback_response import Answer, AnswerIn, AnswerValue
from feedback_core.app.schemas.form import Question
from feedback_core.utils.base import NUMERIC_QUESTION_TYPES, QuestionType, unwrap


def is_empty_answer(value: Optional[AnswerValue]) -> bool:
    return value is None or value == "" or value == []


def _as_number(question: Question, value: AnswerValue) -> Union[int, float]:
    if isinstance(value, bool) or isinstance(value, list):
        raise InvalidAnswer(f'Question "{question.question_text}" expects a number')
    if isinstance(value, (int, float)):
        number: Union[int, float] = value
    else:
        try:
            number = int(value)
        except ValueError:
            try:
                number = float(value)
            except ValueError:
                raise InvalidAnswer(
                    f'Question "{question.question_text}" expects a number'
                )
    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidAnswer(f'Question "{question.question_text}" expects a number')
    return number


def _as_choices(question: Question, value: AnswerValue) -> List[str]:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value]
    raise InvalidAnswer(f'Question "{question.question_text}" expects a list of choices')


def _as_text(question: Question, value: AnswerValue) -> str:
    if isinstance(value, list):
        raise InvalidAnswer(f'Question "{question.question_text}" expects a single value')
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_answer_value(question: Question, value: AnswerValue) -> AnswerValue:
    """
    Coerce a submitted value into the shape its question type stores.

    Choice answers are not checked against ``question.options``: free-form
    values are accepted for radio and checkbox questions.
    """
    if question.question_type in NUMERIC_QUESTION_TYPES:
        return _as_number(question, value)
    if question.question_type == QuestionType.CHECKBOX:
        return _as_choices(question, value)
    return _as_text(question, value)


def validate_answers(
    questions: Sequence[Question],
    submitted: Sequence[AnswerIn],
    *,
    submitted_at: datetime.datetime,
) -> List[Answer]:
    """
    Check a submission against the form's current questions.

    The returned answers keep submission order, reference only questions of
    the form and carry a snapshot of each question's text and type. Optional
    questions may be left out, required ones may not.
    """
    indexed: Dict[str, Question] = {q.id: q for q in questions}
    answered: Set[str] = set()
    answers: List[Answer] = []
    for a in submitted:
        question = indexed.get(a.question_id)
        if question is None:
            raise UnknownQuestion(a.question_id)
        if a.question_id in answered:
            raise ValidationError(
                f'Question "{question.question_text}" is answered more than once'
            )
        answered.add(a.question_id)
        if is_empty_answer(a.answer):
            if question.required:
                raise MissingRequiredAnswer(question.question_text)
            # Blank optional answers are dropped rather than stored
            continue
        answers.append(
            Answer(
                question_id=question.id,
                question_text=question.question_text,
                question_type=question.question_type,
                answer=normalize_answer_value(question, unwrap(a.answer)),
                submitted_at=submitted_at,
            )
        )
    for question in sorted(questions, key=lambda q: q.order):
        if question.required and question.id not in answered:
            raise MissingRequiredAnswer(question.question_text)
    return answers
