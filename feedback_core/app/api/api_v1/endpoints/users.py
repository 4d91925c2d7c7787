import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedback_core.app import crud, schemas
from feedback_core.app.api import deps
from feedback_core.app.config import settings
from feedback_core.app.materialize import user_schema_from_orm
from feedback_core.utils.base import HTTPException_, UserRole

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register_user(
    *,
    db: Session = Depends(deps.get_db),
    user_in: schemas.UserCreate,
) -> Any:
    """
    Create new user without the need to be logged in.
    """
    if not settings.USERS_OPEN_REGISTRATION:
        raise HTTPException_(
            status_code=403,
            detail="Open user registration is forbidden on this server",
        )
    if crud.user.get_by_email(db, email=user_in.email):
        raise HTTPException_(
            status_code=400,
            detail="The user with this email already exists in the system",
        )
    # Admins are only ever seeded, never self-registered
    user_in.role = UserRole.USER
    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered user {user.id}")
    return user_schema_from_orm(user)
