import datetime

import pytest
from sqlalchemy.orm import Session

from feedback_core.app import crud
from feedback_core.app.questions import normalize_questions
from feedback_core.app.schemas.form import FormCreate, FormSettingsUpdate, FormUpdate, QuestionIn
from feedback_core.tests.utils.user import create_random_user
from feedback_core.utils.base import get_utc_now


def _create_form(db: Session, owner, title: str = "Team survey"):
    questions = normalize_questions(
        [QuestionIn(question_text="How are you?", question_type="text", required=True)]
    )
    return crud.form.create_with_owner(
        db,
        obj_in=FormCreate(description="Weekly check-in", is_public=True),
        title=title,
        questions=questions,
        owner=owner,
    )


def test_create_form(db: Session) -> None:
    owner = create_random_user(db)
    form = _create_form(db, owner)
    assert form.owner_id == owner.id
    assert form.version == 1
    assert form.total_responses == 0
    assert form.is_active
    assert form.questions[0]["question_text"] == "How are you?"
    assert crud.form.get_by_uuid(db, uuid=form.uuid).id == form.id


def test_list_for_owner(db: Session) -> None:
    owner = create_random_user(db)
    other = create_random_user(db)
    _create_form(db, owner, title="Alpha feedback")
    beta = _create_form(db, owner, title="Beta feedback")
    _create_form(db, other, title="Alpha elsewhere")
    crud.form.update_with_version(db, db_obj=beta, obj_in=FormUpdate(is_active=False))

    forms, total, pages = crud.form.list_for_owner(db, owner_id=owner.id, page=1, limit=1)
    assert total == 2
    assert pages == 2
    assert len(forms) == 1

    forms, total, _ = crud.form.list_for_owner(
        db, owner_id=owner.id, page=1, limit=10, search="alpha"
    )
    assert [f.title for f in forms] == ["Alpha feedback"]

    forms, total, _ = crud.form.list_for_owner(
        db, owner_id=owner.id, page=1, limit=10, status="inactive"
    )
    assert [f.uuid for f in forms] == [beta.uuid]


def test_update_bumps_version_and_merges_settings(db: Session) -> None:
    owner = create_random_user(db)
    form = _create_form(db, owner)
    form = crud.form.update_with_version(
        db,
        db_obj=form,
        obj_in=FormUpdate(
            title="Renamed",
            max_responses=5,
            settings=FormSettingsUpdate(require_captcha=True),
        ),
    )
    assert form.version == 2
    assert form.title == "Renamed"
    assert form.description == "Weekly check-in"
    assert form.max_responses == 5
    assert form.require_captcha
    assert form.enable_notifications

    form = crud.form.update_with_version(
        db, db_obj=form, obj_in=FormUpdate(max_responses=None, title=None)
    )
    assert form.version == 3
    assert form.max_responses is None
    assert form.title == "Renamed"


def test_duplicate(db: Session) -> None:
    owner = create_random_user(db)
    source = _create_form(db, owner)
    crud.form.record_submission(db, form_id=source.id, at=get_utc_now(), duration=3.0)
    db.refresh(source)

    copy = crud.form.duplicate(db, source=source, owner=owner)
    assert copy.uuid != source.uuid
    assert copy.title == "Team survey (Copy)"
    assert copy.questions == source.questions
    assert copy.version == 1
    assert copy.total_responses == 0
    assert copy.last_response_at is None


def test_submission_counters(db: Session) -> None:
    owner = create_random_user(db)
    form = _create_form(db, owner)
    at = datetime.datetime(2024, 5, 1, 10, 0, tzinfo=datetime.timezone.utc)
    for duration in (10.0, 20.0, 30.0):
        crud.form.record_submission(db, form_id=form.id, at=at, duration=duration)
    db.refresh(form)
    assert form.total_responses == 3
    assert form.average_completion_time == pytest.approx(20.0)
    assert form.last_response_at is not None

    crud.form.record_deletion(db, form_id=form.id, duration=30.0)
    db.refresh(form)
    assert form.total_responses == 2
    assert form.average_completion_time == pytest.approx(15.0)

    for _ in range(4):
        crud.form.record_deletion(db, form_id=form.id, duration=10.0)
    db.refresh(form)
    assert form.total_responses == 0
    assert form.average_completion_time == 0.0
