# flake8: noqa

from .analytics import (
    FormResponseAnalytics,
    QuestionAnalytics,
    ResponseAnalytics,
    ResponseRecord,
)
from .feedback_response import (
    Answer,
    AnswerIn,
    FeedbackResponse,
    FeedbackResponseCreate,
    FeedbackResponseInDBBase,
    FeedbackResponseList,
    FeedbackResponseModerate,
    FeedbackResponseSubmitted,
    ResponseMetadata,
    SubmissionTime,
)
from .form import (
    Form,
    FormAnalytics,
    FormCreate,
    FormInDBBase,
    FormList,
    FormPublic,
    FormSettings,
    FormSettingsUpdate,
    FormUpdate,
    Question,
    QuestionIn,
)
from .msg import GenericResponse, HealthResponse, Pagination
from .notification import (
    Notification,
    NotificationCreate,
    NotificationData,
    NotificationInDBBase,
    NotificationList,
    NotificationUpdate,
    UnreadCount,
)
from .preview import UserPreview
from .token import Token, TokenPayload
from .user import User, UserCreate, UserInDBBase, UserUpdate
