import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from feedback_core.app.schemas.feedback_response import Answer, AnswerValue
from feedback_core.utils.base import (
    Priority,
    QuestionType,
    ResponseStatus,
    Sentiment,
)


# The slice of a stored response the aggregator folds over
class ResponseRecord(BaseModel):
    answers: List[Answer]
    duration: float = 0.0
    status: ResponseStatus = ResponseStatus.SUBMITTED
    sentiment: Sentiment = Sentiment.NEUTRAL
    priority: Priority = Priority.MEDIUM
    created_at: datetime.datetime

    class Config:
        from_attributes = True


class QuestionAnalytics(BaseModel):
    question_id: str
    question_text: str
    question_type: QuestionType
    response_count: int
    answers: List[AnswerValue]


class ResponseAnalytics(BaseModel):
    total_responses: int
    recent_responses: int
    average_completion_time: float
    sentiment_distribution: Dict[str, int]
    status_distribution: Dict[str, int]
    priority_distribution: Dict[str, int]
    daily_trend: Dict[str, int]
    question_analytics: Optional[List[QuestionAnalytics]] = None


class FormResponseAnalytics(ResponseAnalytics):
    form_uuid: str
    last_response_at: Optional[datetime.datetime] = None
