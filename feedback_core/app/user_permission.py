import logging
from typing import Optional

from feedback_core.app import models
from feedback_core.app.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


def can_access(actor: models.User, form: models.Form) -> bool:
    """Owner or admin: the one rule gating every owner-side form operation."""
    if actor.is_admin:
        return True
    return form.owner_id == actor.id


def check_form_access(actor: models.User, form: Optional[models.Form]) -> models.Form:
    if form is None:
        raise NotFound("Form not found")
    if not can_access(actor, form):
        logger.info(f"User {actor.id} is not allowed to access form {form.uuid}")
        raise Forbidden()
    return form


def check_response_access(
    actor: models.User, response: Optional[models.FeedbackResponse]
) -> models.FeedbackResponse:
    if response is None:
        raise NotFound("Response not found")
    check_form_access(actor, response.form)
    return response


def check_notification_access(
    actor: models.User, notification: Optional[models.Notification]
) -> models.Notification:
    if notification is None:
        raise NotFound("Notification not found")
    if notification.receiver_id != actor.id:
        raise Forbidden()
    return notification
