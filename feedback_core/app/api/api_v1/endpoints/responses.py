import datetime
import logging
from typing import Any, Optional

import requests
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas
from feedback_core.app.aggregation import aggregate_responses
from feedback_core.app.answer_validation import validate_answers
from feedback_core.app.api import deps
from feedback_core.app.common import client_ip, is_dev, user_agent
from feedback_core.app.config import settings
from feedback_core.app.errors import ValidationError
from feedback_core.app.export import export_filename, responses_to_csv
from feedback_core.app.limiter import limiter
from feedback_core.app.materialize import (
    feedback_response_schema_from_orm,
    questions_of,
    response_record_from_orm,
)
from feedback_core.app.notify import notify_feedback_submitted, notify_response_reviewed
from feedback_core.app.submission_gate import check_submission_allowed
from feedback_core.app.user_permission import check_form_access, check_response_access
from feedback_core.utils.base import (
    ExportFormat,
    HTTPException_,
    ResponseStatus,
    get_utc_now,
    parse_yyyy_mm_dd_utc,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _verify_hcaptcha(hcaptcha_token: str) -> None:
    r = requests.post(
        "https://hcaptcha.com/siteverify",
        data={
            "sitekey": settings.HCAPTCHA_SITEKEY,
            "secret": settings.HCAPTCHA_SECRET,
            "response": hcaptcha_token,
        },
    )
    if not r.ok or not r.json()["success"]:
        raise HTTPException_(status_code=400, detail="Incorrect hCaptcha")


def _metadata_with_request(
    metadata: schemas.ResponseMetadata, request: Request
) -> schemas.ResponseMetadata:
    filled = metadata.model_copy()
    if filled.ip_address is None:
        filled.ip_address = client_ip(request)
    if filled.user_agent is None:
        filled.user_agent = user_agent(request)
    return filled


def _parse_date(s: Optional[str]) -> Optional[datetime.datetime]:
    if not s:
        return None
    return parse_yyyy_mm_dd_utc(s)


@router.post(
    "/",
    response_model=schemas.FeedbackResponseSubmitted,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.RESPONSE_SUBMISSION_RATE_LIMIT)
def submit_response(
    response: Response,
    request: Request,
    *,
    db: Session = Depends(deps.get_db),
    current_user: Optional[models.User] = Depends(deps.try_get_current_active_user),
    response_in: schemas.FeedbackResponseCreate,
) -> Any:
    if not response_in.form_id or not response_in.answers:
        raise ValidationError("Form ID and answers are required")
    utc_now = get_utc_now()
    form = check_submission_allowed(
        crud.form.get_by_uuid(db, uuid=response_in.form_id), now=utc_now
    )
    if form.require_captcha and not is_dev():
        if response_in.hcaptcha_token is None:
            raise HTTPException_(status_code=400, detail="Missing hCaptcha token")
        _verify_hcaptcha(response_in.hcaptcha_token)
    answers = validate_answers(
        questions_of(form), response_in.answers, submitted_at=utc_now
    )
    submitted_by_id = None
    if current_user is not None and not response_in.is_anonymous:
        submitted_by_id = current_user.id

    feedback = crud.feedback_response.create_with_form(
        db,
        obj_in=response_in,
        form=form,
        answers=answers,
        metadata=_metadata_with_request(response_in.metadata, request),
        submitted_by_id=submitted_by_id,
        end_time=utc_now,
    )
    crud.form.record_submission(
        db, form_id=form.id, at=utc_now, duration=feedback.duration
    )
    logger.info(f"Response {feedback.uuid} submitted to form {form.uuid}")
    notify_feedback_submitted(db, form=form, response=feedback)
    return schemas.FeedbackResponseSubmitted(response_id=feedback.uuid)


@router.get("/form/{form_uuid}", response_model=schemas.FeedbackResponseList)
def get_form_responses(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    form_uuid: str,
    page_params: deps.PageParams = Depends(),
    status: Optional[ResponseStatus] = None,
    search: Optional[str] = None,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=form_uuid))
    responses, total_items, total_pages = crud.feedback_response.list_for_form(
        db,
        form_id=form.id,
        page=page_params.page,
        limit=page_params.limit,
        status=status,
        search=search,
    )
    return schemas.FeedbackResponseList(
        responses=[feedback_response_schema_from_orm(r) for r in responses],
        pagination=schemas.Pagination(
            current=page_params.page, total=total_pages, total_items=total_items
        ),
    )


@router.get("/form/{form_uuid}/export")
def export_form_responses(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    form_uuid: str,
    format: ExportFormat = ExportFormat.CSV,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=form_uuid))
    responses = crud.feedback_response.get_all_for_form(db, form_id=form.id)
    logger.info(
        f"User {current_user.id} exported {len(responses)} responses of form {form.uuid}"
    )
    if format == ExportFormat.CSV:
        return Response(
            content=responses_to_csv(responses),
            media_type="text/csv",
            headers={
                "Content-Disposition": (
                    f"attachment; filename={export_filename(form, 'csv')}"
                )
            },
        )
    return JSONResponse(
        content=jsonable_encoder(
            {"responses": [feedback_response_schema_from_orm(r) for r in responses]}
        ),
        headers={
            "Content-Disposition": f"attachment; filename={export_filename(form, 'json')}"
        },
    )


@router.get("/analytics/overview", response_model=schemas.ResponseAnalytics)
def get_analytics_overview(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Any:
    """
    Aggregate over every response to the caller's own forms, optionally
    restricted to a UTC date range whose bounds are both inclusive.
    """
    try:
        since = _parse_date(start_date)
        until = _parse_date(end_date)
    except ValueError:
        raise HTTPException_(status_code=400, detail="Invalid date range.")
    if until is not None:
        until = until + datetime.timedelta(days=1, microseconds=-1)
    if since is not None and until is not None and since > until:
        raise HTTPException_(status_code=400, detail="Invalid date range.")
    responses = crud.feedback_response.get_for_forms(
        db,
        form_ids=crud.form.get_ids_for_owner(db, owner_id=current_user.id),
        since=since,
        until=until,
    )
    return aggregate_responses(
        [response_record_from_orm(r) for r in responses],
        now=get_utc_now(),
        recent_window=datetime.timedelta(days=settings.RECENT_RESPONSES_DAYS),
    )


@router.get("/{uuid}", response_model=schemas.FeedbackResponse)
def get_response(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    feedback = check_response_access(
        current_user, crud.feedback_response.get_by_uuid(db, uuid=uuid)
    )
    return feedback_response_schema_from_orm(feedback)


@router.patch("/{uuid}/status", response_model=schemas.FeedbackResponse)
def moderate_response(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
    moderation_in: schemas.FeedbackResponseModerate,
) -> Any:
    feedback = check_response_access(
        current_user, crud.feedback_response.get_by_uuid(db, uuid=uuid)
    )
    previous_status = feedback.status
    feedback = crud.feedback_response.moderate(
        db, db_obj=feedback, obj_in=moderation_in, moderator=current_user
    )
    logger.info(f"User {current_user.id} moderated response {feedback.uuid}")
    if feedback.status != previous_status:
        notify_response_reviewed(db, response=feedback)
    return feedback_response_schema_from_orm(feedback)


@router.delete("/{uuid}", response_model=schemas.GenericResponse)
def delete_response(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    feedback = check_response_access(
        current_user, crud.feedback_response.get_by_uuid(db, uuid=uuid)
    )
    form_id, duration = feedback.form_id, feedback.duration
    crud.feedback_response.remove(db, id=feedback.id)
    crud.form.record_deletion(db, form_id=form_id, duration=duration)
    logger.info(f"User {current_user.id} deleted response {uuid}")
    return schemas.GenericResponse(msg="Response deleted successfully")
