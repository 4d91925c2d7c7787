import logging

from sqlalchemy.orm import Session

from feedback_core.app import crud, schemas
from feedback_core.app.config import settings
from feedback_core.db.base import Base
from feedback_core.db.session import engine
from feedback_core.utils.base import UserRole

logger = logging.getLogger(__name__)


def create_tables() -> None:
    # No migrations: the schema is created straight from the models
    Base.metadata.create_all(bind=engine)


def init_db(db: Session) -> None:
    create_tables()
    if settings.FIRST_SUPERUSER is None or settings.FIRST_SUPERUSER_PASSWORD is None:
        logger.info("No FIRST_SUPERUSER configured, skipping superuser creation")
        return
    user = crud.user.get_by_email(db, email=settings.FIRST_SUPERUSER)
    if not user:
        user_in = schemas.UserCreate(
            email=settings.FIRST_SUPERUSER,
            password=settings.FIRST_SUPERUSER_PASSWORD,
            full_name="Admin",
            role=UserRole.ADMIN,
        )
        user = crud.user.create(db, obj_in=user_in)
        logger.info(f"Created superuser {user.email}")
