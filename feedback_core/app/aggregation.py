"""
Analytics over collections of feedback responses.

``aggregate_responses`` is the single fold used by both the per-form
analytics endpoint and the cross-form overview. It is pure: the result only
depends on its arguments, and every mapping in it is key-sorted so equal
inputs serialize to identical JSON.
"""
import datetime
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from feedback_core.app.schemas.analytics import (
    QuestionAnalytics,
    ResponseAnalytics,
    ResponseRecord,
)
from feedback_core.app.schemas.form import Question
from feedback_core.utils.base import as_utc, map_

RECENT_WINDOW = datetime.timedelta(days=7)


def _sorted_counts(counter: Counter) -> Dict[str, int]:
    return {k: counter[k] for k in sorted(counter)}


def _day_of(created_at: datetime.datetime) -> str:
    return as_utc(created_at).date().isoformat()


def average_completion_time(responses: Sequence[ResponseRecord]) -> float:
    if not responses:
        return 0.0
    return sum(r.duration for r in responses) / len(responses)


def question_rollups(
    questions: Sequence[Question], responses: Sequence[ResponseRecord]
) -> List[QuestionAnalytics]:
    rollups = []
    for question in sorted(questions, key=lambda q: q.order):
        values = []
        for r in responses:
            for a in r.answers:
                if a.question_id == question.id:
                    values.append(a.answer)
                    break
        rollups.append(
            QuestionAnalytics(
                question_id=question.id,
                question_text=question.question_text,
                question_type=question.question_type,
                response_count=len(values),
                answers=values,
            )
        )
    return rollups


def aggregate_responses(
    responses: Iterable[ResponseRecord],
    *,
    now: datetime.datetime,
    questions: Optional[Sequence[Question]] = None,
    recent_window: datetime.timedelta = RECENT_WINDOW,
) -> ResponseAnalytics:
    records = list(responses)
    recent_since = as_utc(now) - recent_window
    return ResponseAnalytics(
        total_responses=len(records),
        recent_responses=sum(1 for r in records if as_utc(r.created_at) > recent_since),
        average_completion_time=average_completion_time(records),
        sentiment_distribution=_sorted_counts(Counter(r.sentiment.value for r in records)),
        status_distribution=_sorted_counts(Counter(r.status.value for r in records)),
        priority_distribution=_sorted_counts(Counter(r.priority.value for r in records)),
        daily_trend=_sorted_counts(Counter(_day_of(r.created_at) for r in records)),
        question_analytics=map_(questions, lambda qs: question_rollups(qs, records)),
    )