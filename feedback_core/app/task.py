import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm.session import Session

from feedback_core.app import crud
from feedback_core.app.common import report_exception
from feedback_core.db.session import SessionLocal
from feedback_core.utils.base import get_utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


def execute_with_db(
    db: Session, runnable: Callable[[Session], T], auto_commit: bool = True
) -> Optional[T]:
    try:
        ret = runnable(db)
        if auto_commit:
            db.commit()
        return ret
    except Exception as e:
        db.rollback()
        report_exception(e, context=f"scheduled task {runnable.__name__}")
    finally:
        db.close()
    return None


def purge_expired_notifications() -> Optional[int]:
    def runnable(db: Session) -> int:
        return crud.notification.remove_expired(db, now=get_utc_now())

    logger.debug("purge_expired_notifications called")
    return execute_with_db(SessionLocal(), runnable)
