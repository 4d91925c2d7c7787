# flake8: noqa
# Import all the models, so that Base has them before being
# imported by init_db or create_all

from feedback_core.db.base_class import Base
from feedback_core.app.models import FeedbackResponse, Form, Notification, User
