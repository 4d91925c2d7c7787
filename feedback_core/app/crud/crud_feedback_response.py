import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from feedback_core.app import models
from feedback_core.app.crud.base import CRUDBase, paginate
from feedback_core.app.models.feedback_response import FeedbackResponse
from feedback_core.app.schemas.feedback_response import (
    Answer,
    FeedbackResponseCreate,
    FeedbackResponseModerate,
    ResponseMetadata,
)
from feedback_core.utils.base import ResponseStatus, get_utc_now


class CRUDFeedbackResponse(
    CRUDBase[FeedbackResponse, FeedbackResponseCreate, FeedbackResponseModerate]
):
    def create_with_form(
        self,
        db: Session,
        *,
        obj_in: FeedbackResponseCreate,
        form: models.Form,
        answers: Sequence[Answer],
        metadata: ResponseMetadata,
        submitted_by_id: Optional[int],
        end_time: datetime.datetime,
    ) -> FeedbackResponse:
        db_obj = self.model(
            uuid=self.get_unique_uuid(db),
            form_id=form.id,
            submitted_by_id=submitted_by_id,
            answers=[a.model_dump(mode="json") for a in answers],
            response_metadata=metadata.model_dump(mode="json", exclude_none=True),
            start_time=obj_in.start_time,
            end_time=end_time,
            duration=obj_in.duration or 0.0,
            is_anonymous=submitted_by_id is None,
            status=ResponseStatus.SUBMITTED.value,
            tags=[],
            created_at=end_time,
            updated_at=end_time,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def list_for_form(
        self,
        db: Session,
        *,
        form_id: int,
        page: int,
        limit: int,
        status: Optional[ResponseStatus] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[FeedbackResponse], int, int]:
        query = db.query(FeedbackResponse).filter(FeedbackResponse.form_id == form_id)
        if status is not None:
            query = query.filter(FeedbackResponse.status == status.value)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    cast(FeedbackResponse.answers, String).ilike(pattern),
                    cast(FeedbackResponse.tags, String).ilike(pattern),
                )
            )
        return paginate(
            query.order_by(FeedbackResponse.created_at.desc()), page=page, limit=limit
        )

    def get_all_for_form(self, db: Session, *, form_id: int) -> List[FeedbackResponse]:
        return (
            db.query(FeedbackResponse)
            .filter(FeedbackResponse.form_id == form_id)
            .order_by(FeedbackResponse.created_at.desc())
            .all()
        )

    def get_for_forms(
        self,
        db: Session,
        *,
        form_ids: Sequence[int],
        since: Optional[datetime.datetime] = None,
        until: Optional[datetime.datetime] = None,
    ) -> List[FeedbackResponse]:
        if not form_ids:
            return []
        query = db.query(FeedbackResponse).filter(
            FeedbackResponse.form_id.in_(form_ids)
        )
        if since is not None:
            query = query.filter(FeedbackResponse.created_at >= since)
        if until is not None:
            query = query.filter(FeedbackResponse.created_at <= until)
        return query.order_by(FeedbackResponse.created_at.desc()).all()

    def moderate(
        self,
        db: Session,
        *,
        db_obj: FeedbackResponse,
        obj_in: FeedbackResponseModerate,
        moderator: models.User,
    ) -> FeedbackResponse:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field in ("status", "sentiment", "priority"):
            if update_data.get(field) is not None:
                setattr(db_obj, field, update_data[field].value)
        if "moderation_notes" in update_data:
            db_obj.moderation_notes = update_data["moderation_notes"]
        if update_data.get("tags") is not None:
            db_obj.tags = update_data["tags"]
        utc_now = get_utc_now()
        db_obj.moderated_by_id = moderator.id
        db_obj.moderated_at = utc_now
        db_obj.updated_at = utc_now
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


feedback_response = CRUDFeedbackResponse(FeedbackResponse)
