from typing import Dict, List, Optional, Sequence, Set

from feedback_core.app.errors import UnknownQuestion, ValidationError
from feedback_core.app.schemas.form import Question, QuestionIn
from feedback_core.utils.base import CHOICE_QUESTION_TYPES, QuestionType, get_uuid

MIN_CHOICE_OPTIONS = 2

_QUESTION_TYPES = {t.value: t for t in QuestionType}


def normalize_questions(
    raw: Optional[Sequence[QuestionIn]],
    *,
    existing: Optional[Sequence[Question]] = None,
) -> List[Question]:
    """
    Turn raw question descriptors into a validated question list.

    New questions get a fresh id, ``order`` defaults to the 1-based position.
    When ``existing`` is given (form update), a descriptor may carry the id of
    one of those questions to keep its identity; ids the form never had are
    rejected. On creation supplied ids are ignored.
    """
    if not raw:
        raise ValidationError("Title and at least one question are required")
    known_ids: Optional[Set[str]] = None
    if existing is not None:
        known_ids = {q.id for q in existing}

    questions: List[Question] = []
    seen_orders: Dict[int, int] = {}
    seen_ids: Set[str] = set()
    for i, q in enumerate(raw):
        position = i + 1
        text = (q.question_text or "").strip()
        if not text or not q.question_type:
            raise ValidationError(f"Question {position} is missing required fields")
        question_type = _QUESTION_TYPES.get(q.question_type)
        if question_type is None:
            raise ValidationError(
                f"Question {position} has unsupported type: {q.question_type}"
            )

        options = [o.strip() for o in q.options if o.strip()]
        if question_type in CHOICE_QUESTION_TYPES and len(options) < MIN_CHOICE_OPTIONS:
            raise ValidationError(
                f"Question {position} needs at least {MIN_CHOICE_OPTIONS} options"
            )

        order = q.order if q.order else position
        if order < 1:
            raise ValidationError(f"Question {position} has an invalid order")
        if order in seen_orders:
            raise ValidationError(
                f"Questions {seen_orders[order]} and {position} share order {order}"
            )
        seen_orders[order] = position

        if known_ids is not None and q.id is not None:
            if q.id not in known_ids:
                raise UnknownQuestion(q.id)
            question_id = q.id
        else:
            question_id = get_uuid()
        if question_id in seen_ids:
            raise ValidationError(f"Question {position} repeats an existing question")
        seen_ids.add(question_id)

        questions.append(
            Question(
                id=question_id,
                question_text=text,
                question_type=question_type,
                options=options,
                required=q.required,
                order=order,
            )
        )
    return questions
