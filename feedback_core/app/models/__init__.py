# flake8: noqa

from .feedback_response import FeedbackResponse
from .form import Form
from .notification import Notification
from .user import User
