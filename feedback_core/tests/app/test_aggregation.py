import datetime

from feedback_core.app.aggregation import aggregate_responses
from feedback_core.app.schemas.analytics import ResponseRecord
from feedback_core.app.schemas.feedback_response import Answer
from feedback_core.app.schemas.form import Question
from feedback_core.utils.base import Priority, QuestionType, ResponseStatus, Sentiment

NOW = datetime.datetime(2024, 5, 10, 12, 0, tzinfo=datetime.timezone.utc)

QUESTIONS = [
    Question(
        id="q2", question_text="Comments", question_type=QuestionType.TEXT, order=2
    ),
    Question(
        id="q1", question_text="Score", question_type=QuestionType.RATING, order=1
    ),
]


def _record(days_ago: float, **kwargs) -> ResponseRecord:
    created_at = NOW - datetime.timedelta(days=days_ago)
    answers = [
        Answer(
            question_id=qid,
            question_text=qid,
            question_type=QuestionType.TEXT,
            answer=value,
            submitted_at=created_at,
        )
        for qid, value in kwargs.pop("answers", {}).items()
    ]
    return ResponseRecord(answers=answers, created_at=created_at, **kwargs)


def test_empty_input() -> None:
    result = aggregate_responses([], now=NOW)
    assert result.total_responses == 0
    assert result.recent_responses == 0
    assert result.average_completion_time == 0.0
    assert result.sentiment_distribution == {}
    assert result.status_distribution == {}
    assert result.daily_trend == {}
    assert result.question_analytics is None


def test_counts_and_distributions() -> None:
    records = [
        _record(1, duration=10.0, sentiment=Sentiment.POSITIVE),
        _record(1.2, duration=20.0, status=ResponseStatus.REVIEWED),
        _record(30, duration=60.0, priority=Priority.URGENT),
    ]
    result = aggregate_responses(records, now=NOW)
    assert result.total_responses == 3
    assert result.recent_responses == 2
    assert result.average_completion_time == 30.0
    assert result.sentiment_distribution == {"neutral": 2, "positive": 1}
    assert result.status_distribution == {"reviewed": 1, "submitted": 2}
    assert result.priority_distribution == {"medium": 2, "urgent": 1}
    assert sum(result.daily_trend.values()) == 3
    assert result.daily_trend["2024-05-09"] == 2
    assert list(result.daily_trend) == sorted(result.daily_trend)


def test_naive_timestamps_are_utc() -> None:
    naive = ResponseRecord(answers=[], created_at=datetime.datetime(2024, 5, 9, 23, 30))
    result = aggregate_responses([naive], now=NOW)
    assert result.daily_trend == {"2024-05-09": 1}
    assert result.recent_responses == 1


def test_question_rollups_follow_question_order() -> None:
    records = [
        _record(0.5, answers={"q1": 5, "q2": "Nice"}),
        _record(0.5, answers={"q1": 3}),
    ]
    result = aggregate_responses(records, now=NOW, questions=QUESTIONS)
    assert result.question_analytics is not None
    score, comments = result.question_analytics
    assert score.question_id == "q1"
    assert score.response_count == 2
    assert score.answers == [5, 3]
    assert comments.question_type == QuestionType.TEXT
    assert comments.answers == ["Nice"]


def test_same_input_same_output() -> None:
    records = [
        _record(2, sentiment=Sentiment.NEGATIVE),
        _record(0.1, status=ResponseStatus.APPROVED),
    ]
    first = aggregate_responses(records, now=NOW, questions=QUESTIONS)
    second = aggregate_responses(list(reversed(records)), now=NOW, questions=QUESTIONS)
    assert first.model_dump_json() == second.model_dump_json()
