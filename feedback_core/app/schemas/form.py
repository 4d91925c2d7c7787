import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from feedback_core.app.schemas.msg import Pagination
from feedback_core.app.schemas.preview import UserPreview
from feedback_core.utils.base import QuestionType


# Raw question descriptor as sent by the form builder. Fields are loose on
# purpose, questions.normalize_questions turns them into Question or fails.
class QuestionIn(BaseModel):
    id: Optional[str] = None
    question_text: Optional[str] = None
    question_type: Optional[str] = None
    options: List[str] = []
    required: bool = False
    order: Optional[int] = None


class Question(BaseModel):
    id: str
    question_text: str
    question_type: QuestionType
    options: List[str] = []
    required: bool = False
    order: int


class FormSettings(BaseModel):
    enable_notifications: bool = True
    require_captcha: bool = False
    allow_file_upload: bool = False


class FormSettingsUpdate(BaseModel):
    enable_notifications: Optional[bool] = None
    require_captcha: Optional[bool] = None
    allow_file_upload: Optional[bool] = None


class FormAnalytics(BaseModel):
    total_responses: int = 0
    average_completion_time: float = 0.0
    last_response_at: Optional[datetime.datetime] = None


def _positive_or_none(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 1:
        raise ValueError("max_responses must be a positive integer.")
    return v


# Shared properties
class FormBase(BaseModel):
    description: Optional[str] = None
    is_public: bool = False
    allow_anonymous: bool = False
    max_responses: Optional[int] = None
    expires_at: Optional[datetime.datetime] = None

    @field_validator("max_responses")
    @classmethod
    def _valid_max_responses(cls, v: Optional[int]) -> Optional[int]:
        return _positive_or_none(v)


# Properties to receive via API on creation.
# title and questions are checked by the endpoint so that a missing one is
# reported as a validation_error instead of a schema error.
class FormCreate(FormBase):
    title: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None
    settings: FormSettings = FormSettings()


# Properties to receive via API on update, every field is optional
class FormUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None
    is_active: Optional[bool] = None
    is_public: Optional[bool] = None
    allow_anonymous: Optional[bool] = None
    max_responses: Optional[int] = None
    expires_at: Optional[datetime.datetime] = None
    settings: Optional[FormSettingsUpdate] = None

    @field_validator("max_responses")
    @classmethod
    def _valid_max_responses(cls, v: Optional[int]) -> Optional[int]:
        return _positive_or_none(v)


class FormInDBBase(FormBase):
    uuid: str
    title: str
    questions: List[Question]
    is_active: bool
    version: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


# Additional properties to return via API
class Form(FormInDBBase):
    owner: UserPreview
    settings: FormSettings
    analytics: FormAnalytics


# What respondents see through the public link
class FormPublic(BaseModel):
    uuid: str
    title: str
    description: Optional[str] = None
    questions: List[Question]
    owner: UserPreview
    allow_anonymous: bool
    expires_at: Optional[datetime.datetime] = None
    require_captcha: bool
    allow_file_upload: bool


class FormList(BaseModel):
    forms: List[Form]
    pagination: Pagination
