from typing import List

from feedback_core.app import models, schemas
from feedback_core.app.schemas.feedback_response import (
    ResponseMetadata,
    SubmissionTime,
)
from feedback_core.app.schemas.form import FormAnalytics, FormSettings
from feedback_core.utils.base import map_


def user_schema_from_orm(user: models.User) -> schemas.User:
    return schemas.User.model_validate(user)


def preview_of_user(user: models.User) -> schemas.UserPreview:
    return schemas.UserPreview(
        uuid=user.uuid,
        full_name=user.full_name,
        display_name=user.display_name,
    )


def form_settings_of(form: models.Form) -> FormSettings:
    return FormSettings(
        enable_notifications=form.enable_notifications,
        require_captcha=form.require_captcha,
        allow_file_upload=form.allow_file_upload,
    )


def form_schema_from_orm(form: models.Form) -> schemas.Form:
    base = schemas.FormInDBBase.model_validate(form)
    d = base.model_dump()
    d["owner"] = preview_of_user(form.owner)
    d["settings"] = form_settings_of(form)
    d["analytics"] = FormAnalytics(
        total_responses=form.total_responses,
        average_completion_time=form.average_completion_time,
        last_response_at=form.last_response_at,
    )
    return schemas.Form(**d)


def form_public_schema_from_orm(form: models.Form) -> schemas.FormPublic:
    return schemas.FormPublic(
        uuid=form.uuid,
        title=form.title,
        description=form.description,
        questions=sorted(questions_of(form), key=lambda q: q.order),
        owner=preview_of_user(form.owner),
        allow_anonymous=form.allow_anonymous,
        expires_at=form.expires_at,
        require_captcha=form.require_captcha,
        allow_file_upload=form.allow_file_upload,
    )


def questions_of(form: models.Form) -> List[schemas.Question]:
    return [schemas.Question.model_validate(q) for q in form.questions]


def feedback_response_schema_from_orm(
    response: models.FeedbackResponse,
) -> schemas.FeedbackResponse:
    base = schemas.FeedbackResponseInDBBase.model_validate(response)
    d = base.model_dump()
    d["form_uuid"] = response.form.uuid
    d["form_title"] = response.form.title
    d["submitted_by"] = map_(response.submitted_by, preview_of_user)
    d["moderated_by"] = map_(response.moderated_by, preview_of_user)
    # Stored as response_metadata, ``metadata`` is reserved on declarative models
    d["metadata"] = ResponseMetadata(**(response.response_metadata or {}))
    d["submission_time"] = SubmissionTime(
        start_time=response.start_time,
        end_time=response.end_time,
        duration=response.duration,
    )
    return schemas.FeedbackResponse(**d)


def response_record_from_orm(response: models.FeedbackResponse) -> schemas.ResponseRecord:
    return schemas.ResponseRecord.model_validate(response)


def notification_schema_from_orm(
    notification: models.Notification,
) -> schemas.Notification:
    return schemas.Notification.model_validate(notification)
