import datetime
import enum
from typing import Callable, List, Literal, Optional, TypeVar, Union

import shortuuid
from fastapi.exceptions import HTTPException
from pytz import utc

ErrorMsg = Union[
    Literal["Could not validate credentials"],
    Literal["Incorrect email or password"],
    Literal["Inactive user"],
    Literal["User not found"],
    Literal["The user with this email already exists in the system"],
    Literal["Open user registration is forbidden on this server"],
    Literal["Missing hCaptcha token"],
    Literal["Incorrect hCaptcha"],
    Literal["Invalid date range."],
]


def HTTPException_(status_code: int, detail: ErrorMsg) -> HTTPException:
    return HTTPException(status_code=status_code, detail=detail)


def get_utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


T = TypeVar("T")
S = TypeVar("S")


def map_(v: Optional[T], f: Callable[[T], S]) -> Optional[S]:
    if v is not None:
        return f(v)
    return None


def unwrap(v: Optional[T]) -> T:
    assert v is not None
    return v


def dedup_keep_order(vs: List[T]) -> List[T]:
    return list(dict.fromkeys(vs))


UUID_LENGTH = 20


def get_uuid() -> str:
    return shortuuid.ShortUUID().random(length=UUID_LENGTH)


def as_utc(dt: datetime.datetime) -> datetime.datetime:
    # SQLite drops tzinfo on the way back, so naive values are treated as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def parse_yyyy_mm_dd_utc(s: str) -> datetime.datetime:
    return datetime.datetime.strptime(s, "%Y-%m-%d").replace(tzinfo=utc)


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class QuestionType(str, enum.Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    RATING = "rating"
    EMAIL = "email"
    NUMBER = "number"


CHOICE_QUESTION_TYPES = (QuestionType.RADIO, QuestionType.CHECKBOX)
NUMERIC_QUESTION_TYPES = (QuestionType.RATING, QuestionType.NUMBER)


class ResponseStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"
    APPROVED = "approved"
    REJECTED = "rejected"


class Sentiment(str, enum.Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class NotificationType(str, enum.Enum):
    FEEDBACK_SUBMITTED = "feedback_submitted"
    FORM_CREATED = "form_created"
    RESPONSE_REVIEWED = "response_reviewed"
    SYSTEM_UPDATE = "system_update"
    REMINDER = "reminder"


class ExportFormat(str, enum.Enum):
    CSV = "csv"
    JSON = "json"
