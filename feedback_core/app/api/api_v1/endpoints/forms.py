import datetime
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas
from feedback_core.app.aggregation import aggregate_responses
from feedback_core.app.api import deps
from feedback_core.app.config import settings
from feedback_core.app.crud.crud_form import FormStatusFilter
from feedback_core.app.errors import Conflict, ValidationError
from feedback_core.app.materialize import (
    form_public_schema_from_orm,
    form_schema_from_orm,
    questions_of,
    response_record_from_orm,
)
from feedback_core.app.notify import notify_form_created
from feedback_core.app.questions import normalize_questions
from feedback_core.app.submission_gate import check_submission_allowed
from feedback_core.app.user_permission import check_form_access
from feedback_core.utils.base import get_utc_now
from feedback_core.utils.validators import validate_form_title

logger = logging.getLogger(__name__)

router = APIRouter()


def _checked_title(title: Optional[str]) -> str:
    try:
        return validate_form_title(title or "")
    except ValueError:
        raise ValidationError("Title and at least one question are required")


@router.post("/", response_model=schemas.Form, status_code=status.HTTP_201_CREATED)
def create_form(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    form_in: schemas.FormCreate,
) -> Any:
    title = _checked_title(form_in.title)
    questions = normalize_questions(form_in.questions)
    form = crud.form.create_with_owner(
        db, obj_in=form_in, title=title, questions=questions, owner=current_user
    )
    logger.info(f"User {current_user.id} created form {form.uuid}")
    notify_form_created(db, form=form)
    return form_schema_from_orm(form)


@router.get("/", response_model=schemas.FormList)
def get_forms(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    page_params: deps.PageParams = Depends(),
    status: Optional[FormStatusFilter] = None,
    search: Optional[str] = None,
) -> Any:
    forms, total_items, total_pages = crud.form.list_for_owner(
        db,
        owner_id=current_user.id,
        page=page_params.page,
        limit=page_params.limit,
        status=status,
        search=search,
    )
    return schemas.FormList(
        forms=[form_schema_from_orm(f) for f in forms],
        pagination=schemas.Pagination(
            current=page_params.page, total=total_pages, total_items=total_items
        ),
    )


@router.get("/public/{uuid}", response_model=schemas.FormPublic)
def get_public_form(
    *,
    db: Session = Depends(deps.get_db),
    uuid: str,
) -> Any:
    form = check_submission_allowed(
        crud.form.get_by_uuid(db, uuid=uuid), now=get_utc_now()
    )
    return form_public_schema_from_orm(form)


@router.get("/{uuid}", response_model=schemas.Form)
def get_form(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=uuid))
    return form_schema_from_orm(form)


@router.put("/{uuid}", response_model=schemas.Form)
def update_form(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
    form_in: schemas.FormUpdate,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=uuid))
    if form_in.title is not None:
        form_in.title = _checked_title(form_in.title)
    questions = None
    if form_in.questions is not None:
        questions = normalize_questions(form_in.questions, existing=questions_of(form))
    form = crud.form.update_with_version(
        db, db_obj=form, obj_in=form_in, questions=questions
    )
    logger.info(f"User {current_user.id} updated form {form.uuid} to v{form.version}")
    return form_schema_from_orm(form)


@router.delete("/{uuid}", response_model=schemas.GenericResponse)
def delete_form(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=uuid))
    if crud.form.has_responses(db, form_id=form.id):
        raise Conflict(
            "Cannot delete form with existing responses. Consider deactivating instead."
        )
    crud.form.remove(db, id=form.id)
    logger.info(f"User {current_user.id} deleted form {uuid}")
    return schemas.GenericResponse(msg="Form deleted successfully")


@router.get("/{uuid}/analytics", response_model=schemas.FormResponseAnalytics)
def get_form_analytics(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    form = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=uuid))
    records = [
        response_record_from_orm(r)
        for r in crud.feedback_response.get_all_for_form(db, form_id=form.id)
    ]
    analytics = aggregate_responses(
        records,
        now=get_utc_now(),
        questions=questions_of(form),
        recent_window=datetime.timedelta(days=settings.RECENT_RESPONSES_DAYS),
    )
    return schemas.FormResponseAnalytics(
        **analytics.model_dump(),
        form_uuid=form.uuid,
        last_response_at=form.last_response_at,
    )


@router.post(
    "/{uuid}/duplicate",
    response_model=schemas.Form,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_form(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    uuid: str,
) -> Any:
    source = check_form_access(current_user, crud.form.get_by_uuid(db, uuid=uuid))
    form = crud.form.duplicate(db, source=source, owner=current_user)
    logger.info(f"User {current_user.id} duplicated form {source.uuid} as {form.uuid}")
    return form_schema_from_orm(form)
