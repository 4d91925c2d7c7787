"""
Best-effort notifications.

Notifications are a side channel: a failure here is logged and reported but
never fails the operation that triggered it, which has already been committed
by the time these helpers run.
"""
import datetime
import logging
from typing import Optional

from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas
from feedback_core.app.common import report_exception
from feedback_core.app.config import settings
from feedback_core.utils.base import NotificationType, Priority, get_utc_now

logger = logging.getLogger(__name__)


def _send(
    db: Session,
    *,
    receiver_id: int,
    type: NotificationType,
    title: str,
    message: str,
    data: schemas.NotificationData,
    priority: Priority = Priority.MEDIUM,
) -> Optional[models.Notification]:
    utc_now = get_utc_now()
    try:
        return crud.notification.create(
            db,
            obj_in=schemas.NotificationCreate(
                receiver_id=receiver_id,
                type=type,
                title=title,
                message=message,
                data=data,
                priority=priority,
                created_at=utc_now,
                expires_at=utc_now
                + datetime.timedelta(days=settings.NOTIFICATION_TTL_DAYS),
            ),
        )
    except Exception as e:
        db.rollback()
        report_exception(e, context=f"Failed to send {type.value} notification")
        return None


def notify_form_created(db: Session, *, form: models.Form) -> None:
    _send(
        db,
        receiver_id=form.owner_id,
        type=NotificationType.FORM_CREATED,
        title="Form Created Successfully",
        message=(
            f'Your feedback form "{form.title}" has been created '
            "and is ready to collect responses."
        ),
        data=schemas.NotificationData(
            form_uuid=form.uuid, action_url=f"/forms/{form.uuid}"
        ),
    )


def notify_feedback_submitted(
    db: Session, *, form: models.Form, response: models.FeedbackResponse
) -> None:
    if not form.enable_notifications:
        return
    _send(
        db,
        receiver_id=form.owner_id,
        type=NotificationType.FEEDBACK_SUBMITTED,
        title="New Feedback Received",
        message=f'A new response has been submitted for your form "{form.title}".',
        data=schemas.NotificationData(
            form_uuid=form.uuid,
            response_uuid=response.uuid,
            action_url=f"/responses/{response.uuid}",
        ),
    )


def notify_response_reviewed(
    db: Session, *, response: models.FeedbackResponse
) -> None:
    if response.is_anonymous or response.submitted_by_id is None:
        return
    _send(
        db,
        receiver_id=response.submitted_by_id,
        type=NotificationType.RESPONSE_REVIEWED,
        title="Your Feedback Was Reviewed",
        message=(
            f'Your response to "{response.form.title}" is now {response.status}.'
        ),
        data=schemas.NotificationData(
            form_uuid=response.form.uuid, response_uuid=response.uuid
        ),
        priority=Priority.LOW,
    )
