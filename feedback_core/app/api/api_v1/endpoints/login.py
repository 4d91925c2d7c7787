import datetime
import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic.types import SecretStr
from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas, security
from feedback_core.app.api import deps
from feedback_core.app.config import settings
from feedback_core.utils.base import HTTPException_
from feedback_core.utils.validators import validate_case_insensitive_email

logger = logging.getLogger(__name__)

router = APIRouter()


def _login_user(user: models.User) -> schemas.Token:
    if not crud.user.is_active(user):
        raise HTTPException_(status_code=400, detail="Inactive user")
    access_token_expires = datetime.timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    logger.info(f"User {user.id} logged in")
    return schemas.Token(
        access_token=security.create_access_token(
            user.id, expires_delta=access_token_expires
        ),
        token_type="bearer",
    )


@router.post("/login/access-token", response_model=schemas.Token)
def login_access_token(
    *,
    db: Session = Depends(deps.get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    email = validate_case_insensitive_email(form_data.username)
    user = crud.user.authenticate(
        db, email=email, password=SecretStr(form_data.password)
    )
    if not user:
        raise HTTPException_(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _login_user(user)
