# flake8: noqa

from .crud_feedback_response import feedback_response
from .crud_form import form
from .crud_notification import notification
from .crud_user import user
