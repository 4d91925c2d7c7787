import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from feedback_core.app.schemas.msg import Pagination
from feedback_core.app.schemas.preview import UserPreview
from feedback_core.utils.base import (
    Priority,
    QuestionType,
    ResponseStatus,
    Sentiment,
    dedup_keep_order,
)

# Closed set of answer shapes; which one applies is decided by the question type
AnswerValue = Union[bool, int, float, str, List[str]]


class AnswerIn(BaseModel):
    question_id: str
    answer: Optional[AnswerValue] = None


class Answer(BaseModel):
    question_id: str
    question_text: str
    question_type: QuestionType
    answer: AnswerValue
    submitted_at: datetime.datetime


class ResponseMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    device_type: Optional[str] = None
    browser: Optional[str] = None
    os: Optional[str] = None
    screen_resolution: Optional[str] = None
    time_zone: Optional[str] = None
    language: Optional[str] = None


class SubmissionTime(BaseModel):
    start_time: Optional[datetime.datetime] = None
    end_time: datetime.datetime
    duration: float = 0.0


# Properties to receive via API on creation
class FeedbackResponseCreate(BaseModel):
    form_id: Optional[str] = None
    answers: List[AnswerIn] = []
    is_anonymous: bool = False
    metadata: ResponseMetadata = ResponseMetadata()
    start_time: Optional[datetime.datetime] = None
    duration: Optional[float] = None
    hcaptcha_token: Optional[str] = None

    @field_validator("duration")
    @classmethod
    def _valid_duration(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("duration can't be negative.")
        return v


class FeedbackResponseSubmitted(BaseModel):
    msg: str = "Feedback submitted successfully"
    response_id: str


# Properties to receive via API on moderation
class FeedbackResponseModerate(BaseModel):
    status: Optional[ResponseStatus] = None
    moderation_notes: Optional[str] = None
    tags: Optional[List[str]] = None
    sentiment: Optional[Sentiment] = None
    priority: Optional[Priority] = None

    @field_validator("tags")
    @classmethod
    def _valid_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return dedup_keep_order([t.strip() for t in v if t.strip()])


class FeedbackResponseInDBBase(BaseModel):
    uuid: str
    answers: List[Answer]
    status: ResponseStatus
    moderation_notes: Optional[str] = None
    moderated_at: Optional[datetime.datetime] = None
    is_anonymous: bool
    tags: List[str]
    sentiment: Sentiment
    priority: Priority
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


# Additional properties to return via API
class FeedbackResponse(FeedbackResponseInDBBase):
    form_uuid: str
    form_title: str
    submitted_by: Optional[UserPreview] = None
    moderated_by: Optional[UserPreview] = None
    metadata: ResponseMetadata
    submission_time: SubmissionTime


class FeedbackResponseList(BaseModel):
    responses: List[FeedbackResponse]
    pagination: Pagination
