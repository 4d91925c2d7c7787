import datetime
import logging
from typing import List, Optional, Tuple

from sqlalchemy import delete, update
from sqlalchemy.orm import Query, Session

from feedback_core.app.crud.base import CRUDBase, paginate
from feedback_core.app.models.notification import Notification
from feedback_core.app.schemas.notification import NotificationCreate, NotificationUpdate
from feedback_core.utils.base import as_utc, get_utc_now

logger = logging.getLogger(__name__)


class CRUDNotification(CRUDBase[Notification, NotificationCreate, NotificationUpdate]):
    def _live(self, db: Session, *, receiver_id: int, now: datetime.datetime) -> Query:
        return db.query(Notification).filter(
            Notification.receiver_id == receiver_id, Notification.expires_at > now
        )

    def create(self, db: Session, *, obj_in: NotificationCreate) -> Notification:
        db_obj = Notification(
            receiver_id=obj_in.receiver_id,
            type=obj_in.type.value,
            title=obj_in.title,
            message=obj_in.message,
            data=obj_in.data.model_dump(mode="json", exclude_none=True),
            priority=obj_in.priority.value,
            created_at=obj_in.created_at,
            expires_at=obj_in.expires_at,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_page(
        self,
        db: Session,
        *,
        receiver_id: int,
        page: int,
        limit: int,
        unread_only: bool = False,
    ) -> Tuple[List[Notification], int, int]:
        query = self._live(db, receiver_id=receiver_id, now=get_utc_now())
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return paginate(
            query.order_by(Notification.created_at.desc(), Notification.id.desc()),
            page=page,
            limit=limit,
        )

    def get_unread_count(self, db: Session, *, receiver_id: int) -> int:
        return (
            self._live(db, receiver_id=receiver_id, now=get_utc_now())
            .filter(Notification.is_read.is_(False))
            .count()
        )

    def get_live(self, db: Session, *, id: int) -> Optional[Notification]:
        notification = self.get(db, id)
        if notification is None or as_utc(notification.expires_at) <= get_utc_now():
            return None
        return notification

    def mark_read(self, db: Session, *, db_obj: Notification) -> Notification:
        return self.update(db, db_obj=db_obj, obj_in={"is_read": True})

    def mark_all_read(self, db: Session, *, receiver_id: int) -> int:
        result = db.execute(
            update(Notification)
            .where(
                Notification.receiver_id == receiver_id,
                Notification.expires_at > get_utc_now(),
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount

    def remove_expired(self, db: Session, *, now: datetime.datetime) -> int:
        result = db.execute(
            delete(Notification)
            .where(Notification.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        logger.info(f"Purged {result.rowcount} expired notifications")
        return result.rowcount


notification = CRUDNotification(Notification)
