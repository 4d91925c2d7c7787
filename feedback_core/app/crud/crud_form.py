import datetime
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from sqlalchemy import case, or_, update
from sqlalchemy.orm import Session

from feedback_core.app import models
from feedback_core.app.crud.base import CRUDBase, paginate
from feedback_core.app.models.feedback_response import FeedbackResponse
from feedback_core.app.models.form import Form
from feedback_core.app.schemas.form import (
    FormCreate,
    FormUpdate,
    Question,
)
from feedback_core.utils.base import get_utc_now

FormStatusFilter = Literal["active", "inactive"]

# Columns a partial update may clear by sending null
_NULLABLE_FIELDS = {"description", "max_responses", "expires_at"}


def _dump_questions(questions: Sequence[Question]) -> List[Dict[str, Any]]:
    return [q.model_dump(mode="json") for q in questions]


class CRUDForm(CRUDBase[Form, FormCreate, FormUpdate]):
    def create_with_owner(
        self,
        db: Session,
        *,
        obj_in: FormCreate,
        title: str,
        questions: Sequence[Question],
        owner: models.User,
    ) -> Form:
        utc_now = get_utc_now()
        db_obj = self.model(
            uuid=self.get_unique_uuid(db),
            owner_id=owner.id,
            title=title,
            description=obj_in.description,
            questions=_dump_questions(questions),
            is_public=obj_in.is_public,
            allow_anonymous=obj_in.allow_anonymous,
            max_responses=obj_in.max_responses,
            expires_at=obj_in.expires_at,
            enable_notifications=obj_in.settings.enable_notifications,
            require_captcha=obj_in.settings.require_captcha,
            allow_file_upload=obj_in.settings.allow_file_upload,
            created_at=utc_now,
            updated_at=utc_now,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def list_for_owner(
        self,
        db: Session,
        *,
        owner_id: int,
        page: int,
        limit: int,
        status: Optional[FormStatusFilter] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Form], int, int]:
        query = db.query(Form).filter(Form.owner_id == owner_id)
        if status == "active":
            query = query.filter(Form.is_active.is_(True))
        elif status == "inactive":
            query = query.filter(Form.is_active.is_(False))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(Form.title.ilike(pattern), Form.description.ilike(pattern))
            )
        return paginate(query.order_by(Form.created_at.desc()), page=page, limit=limit)

    def update_with_version(
        self,
        db: Session,
        *,
        db_obj: Form,
        obj_in: FormUpdate,
        questions: Optional[Sequence[Question]] = None,
    ) -> Form:
        """
        Apply a partial update and bump ``version``.

        The version bump is issued as ``version = version + 1`` so two
        concurrent updates never collapse into one increment.
        """
        update_data = obj_in.model_dump(
            exclude_unset=True, exclude={"questions", "settings"}
        )
        for field, value in update_data.items():
            if value is None and field not in _NULLABLE_FIELDS:
                continue
            setattr(db_obj, field, value)
        if questions is not None:
            db_obj.questions = _dump_questions(questions)
        if obj_in.settings is not None:
            for field, value in obj_in.settings.model_dump(exclude_none=True).items():
                setattr(db_obj, field, value)
        db_obj.version = Form.version + 1
        db_obj.updated_at = get_utc_now()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def duplicate(self, db: Session, *, source: Form, owner: models.User) -> Form:
        utc_now = get_utc_now()
        db_obj = self.model(
            uuid=self.get_unique_uuid(db),
            owner_id=owner.id,
            title=f"{source.title} (Copy)",
            description=source.description,
            questions=list(source.questions),
            is_active=source.is_active,
            is_public=source.is_public,
            allow_anonymous=source.allow_anonymous,
            max_responses=source.max_responses,
            expires_at=source.expires_at,
            enable_notifications=source.enable_notifications,
            require_captcha=source.require_captcha,
            allow_file_upload=source.allow_file_upload,
            created_at=utc_now,
            updated_at=utc_now,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_ids_for_owner(self, db: Session, *, owner_id: int) -> List[int]:
        return [id for (id,) in db.query(Form.id).filter(Form.owner_id == owner_id)]

    def has_responses(self, db: Session, *, form_id: int) -> bool:
        return (
            db.query(FeedbackResponse.id).filter_by(form_id=form_id).first()
            is not None
        )

    def record_submission(
        self,
        db: Session,
        *,
        form_id: int,
        at: datetime.datetime,
        duration: float,
    ) -> None:
        # Single statement: the running mean reads the pre-increment count.
        db.execute(
            update(Form)
            .where(Form.id == form_id)
            .values(
                total_responses=Form.total_responses + 1,
                average_completion_time=(
                    Form.average_completion_time * Form.total_responses + duration
                )
                / (Form.total_responses + 1),
                last_response_at=at,
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()

    def record_deletion(self, db: Session, *, form_id: int, duration: float) -> None:
        db.execute(
            update(Form)
            .where(Form.id == form_id)
            .values(
                total_responses=case(
                    (Form.total_responses > 0, Form.total_responses - 1), else_=0
                ),
                average_completion_time=case(
                    (Form.total_responses <= 1, 0.0),
                    else_=(
                        Form.average_completion_time * Form.total_responses - duration
                    )
                    / (Form.total_responses - 1),
                ),
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()


form = CRUDForm(Form)
